"""Placeholder substitution for email-signature templates."""
import html
import re
from dataclasses import dataclass

UNRESOLVED_PLACEHOLDER_RE = re.compile(r"\{[^}]+\}")


@dataclass(frozen=True)
class SignatureValues:
    full_name: str = ""
    position: str = ""
    phone: str = ""
    phone_extension: str = ""
    email: str = ""
    website: str = ""
    photo_url: str = ""


@dataclass(frozen=True)
class CompanyBrand:
    name: str = ""
    logo_url: str | None = None
    website: str | None = None


def placeholder_values(values: SignatureValues, company: CompanyBrand) -> dict[str, str]:
    return {
        "{full_name}": values.full_name,
        "{position}": values.position,
        "{phone}": values.phone,
        "{phone_extension}": f" ext. {values.phone_extension}" if values.phone_extension else "",
        "{email}": values.email,
        "{website}": values.website or company.website or "",
        "{company_name}": company.name,
        "{company_logo}": company.logo_url or "",
        "{photo_url}": values.photo_url,
    }


def render_signature(template_html: str, values: SignatureValues, company: CompanyBrand) -> str:
    """Fill known placeholders (HTML-escaped) and drop any that remain."""
    rendered = template_html
    for placeholder, value in placeholder_values(values, company).items():
        rendered = rendered.replace(placeholder, html.escape(value, quote=True))
    return UNRESOLVED_PLACEHOLDER_RE.sub("", rendered)
