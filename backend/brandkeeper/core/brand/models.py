import uuid
from sqlalchemy import Boolean, Index, String, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from brandkeeper.db.base import Base, TimestampMixin, CompanyScopedMixin

LOGO_VARIANT_KEYS = ("principal", "imagotipo", "isotipo", "negativo", "contraido")


class BrandSettings(Base, TimestampMixin, CompanyScopedMixin):
    __tablename__ = "brand_settings"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    primary_color: Mapped[str] = mapped_column(String(7), nullable=False)
    secondary_color: Mapped[str | None] = mapped_column(String(7), nullable=True)
    tertiary_color: Mapped[str | None] = mapped_column(String(7), nullable=True)
    negative_color: Mapped[str | None] = mapped_column(String(7), nullable=True)
    font_family: Mapped[str] = mapped_column(String(255), nullable=False)
    secondary_font: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contrast_font: Mapped[str | None] = mapped_column(String(255), nullable=True)
    logo_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    logo_variants: Mapped[dict] = mapped_column(JSONB, nullable=False, default=dict)
    is_global: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        # one company-specific row per company, one global row overall
        Index("uq_brand_settings_company", "company_id", unique=True, postgresql_where=text("NOT is_global")),
        Index("uq_brand_settings_global", "is_global", unique=True, postgresql_where=text("is_global")),
    )
