import pytest
from pydantic import ValidationError

from brandkeeper.core.social_media.platforms import SOCIAL_MEDIA_CONFIGS, SocialMediaType, validate_social_media_url
from brandkeeper.core.social_media.schemas import SocialMediaUpdate


@pytest.mark.parametrize(
    "type_, url",
    [
        ("facebook", "https://www.facebook.com/acme"),
        ("facebook", "https://fb.com/acme"),
        ("twitter", "https://x.com/acme"),
        ("youtube", "https://youtu.be/abc123"),
        ("youtube", "https://www.youtube.com/@acme"),
        ("tiktok", "https://www.tiktok.com/@acme"),
        ("whatsapp", "https://wa.me/5215555555555"),
        ("threads", "https://www.threads.net/@acme"),
    ],
)
def test_valid_profile_urls(type_, url):
    assert validate_social_media_url(url, type_)


@pytest.mark.parametrize(
    "type_, url",
    [
        ("facebook", "https://twitter.com/acme"),
        ("instagram", "instagram.com/acme"),
        ("tiktok", "https://www.tiktok.com/acme"),
        ("linkedin", "https://www.linkedin.com/"),
        ("myspace", "https://myspace.com/acme"),
    ],
)
def test_invalid_profile_urls(type_, url):
    assert not validate_social_media_url(url, type_)


def test_every_platform_placeholder_matches_its_pattern():
    assert set(SOCIAL_MEDIA_CONFIGS) == set(SocialMediaType)
    for config in SOCIAL_MEDIA_CONFIGS.values():
        assert validate_social_media_url(config.placeholder, config.type), config.label


def test_update_accepts_camel_case_and_blank_urls():
    data = SocialMediaUpdate.model_validate(
        {"socialMedia": [{"type": "instagram", "url": " https://instagram.com/acme "}, {"type": "facebook", "url": ""}]}
    )
    assert data.social_media[0].url == "https://instagram.com/acme"
    assert data.social_media[1].url == ""


def test_update_reports_platform_label():
    with pytest.raises(ValidationError) as exc:
        SocialMediaUpdate.model_validate({"socialMedia": [{"type": "linkedin", "url": "https://facebook.com/acme"}]})
    error = exc.value.errors()[0]
    assert error["loc"] == ("socialMedia", 0, "url")
    assert error["msg"] == "La URL no es válida para LinkedIn"


def test_update_rejects_unknown_platform():
    with pytest.raises(ValidationError) as exc:
        SocialMediaUpdate.model_validate({"social_media": [{"type": "myspace", "url": "https://myspace.com/x"}]})
    assert exc.value.errors()[0]["msg"] == "La red social no es válida"


class _Rows:
    def __init__(self, rows):
        self._rows = rows

    def scalars(self):
        return self

    def all(self):
        return self._rows


def test_replace_deactivates_missing_and_upserts(db, monkeypatch):
    import asyncio
    import uuid

    from brandkeeper.core.companies import service as companies_service
    from brandkeeper.core.policy import Subject, UserRole
    from brandkeeper.core.social_media import service
    from brandkeeper.core.social_media.models import CompanySocialMedia
    from brandkeeper.core.social_media.schemas import SocialMediaItem

    company_id = uuid.uuid4()
    facebook = CompanySocialMedia(company_id=company_id, type="facebook", url="https://facebook.com/old", is_active=True)
    tiktok = CompanySocialMedia(company_id=company_id, type="tiktok", url="https://www.tiktok.com/@acme", is_active=True)

    async def company(_db, _id):
        return object()

    async def execute(*args, **kwargs):
        return _Rows([facebook, tiktok])

    monkeypatch.setattr(companies_service, "get_company", company)
    db.execute = execute

    admin = Subject(user_id=uuid.uuid4(), role=UserRole.ADMIN, company_id=company_id)
    items = [
        SocialMediaItem(type="facebook", url="https://facebook.com/new"),
        SocialMediaItem(type="instagram", url="https://instagram.com/acme"),
        SocialMediaItem(type="youtube", url=""),
    ]
    saved = asyncio.run(service.replace_social_media(db, admin, company_id, items))

    assert [row.type for row in saved] == ["facebook", "instagram"]
    assert facebook.url == "https://facebook.com/new"
    assert tiktok.is_active is False
    assert [row.type for row in db.added] == ["instagram"]
