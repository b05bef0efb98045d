from fastapi import APIRouter, Depends

from brandkeeper.core.fonts.schemas import FontRead
from brandkeeper.core.fonts.service import FontCatalogue, get_font_catalogue
from brandkeeper.core.responses import Envelope, ok

router = APIRouter(prefix="/google-fonts", tags=["fonts"])


@router.get("", response_model=Envelope[list[FontRead]])
async def list_google_fonts(catalogue: FontCatalogue = Depends(get_font_catalogue)):
    return ok(await catalogue.get_fonts())
