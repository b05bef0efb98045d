"""Catalogue of supported social networks and their profile-URL patterns."""
import enum
import re
from dataclasses import dataclass


class SocialMediaType(str, enum.Enum):
    FACEBOOK = "facebook"
    INSTAGRAM = "instagram"
    TWITTER = "twitter"
    LINKEDIN = "linkedin"
    YOUTUBE = "youtube"
    TIKTOK = "tiktok"
    WHATSAPP = "whatsapp"
    PINTEREST = "pinterest"
    SNAPCHAT = "snapchat"
    THREADS = "threads"


@dataclass(frozen=True)
class PlatformConfig:
    type: SocialMediaType
    label: str
    placeholder: str
    url_pattern: re.Pattern
    base_url: str


def _platform(type_: SocialMediaType, label: str, placeholder: str, pattern: str, base_url: str) -> PlatformConfig:
    return PlatformConfig(type_, label, placeholder, re.compile(pattern, re.IGNORECASE), base_url)


SOCIAL_MEDIA_CONFIGS: dict[SocialMediaType, PlatformConfig] = {
    config.type: config
    for config in (
        _platform(SocialMediaType.FACEBOOK, "Facebook", "https://www.facebook.com/tu-empresa",
                  r"^https?://(www\.)?(facebook|fb)\.com/.+", "https://www.facebook.com"),
        _platform(SocialMediaType.INSTAGRAM, "Instagram", "https://www.instagram.com/tu-empresa",
                  r"^https?://(www\.)?instagram\.com/.+", "https://www.instagram.com"),
        _platform(SocialMediaType.TWITTER, "Twitter / X", "https://x.com/tu-empresa",
                  r"^https?://(www\.)?(twitter|x)\.com/.+", "https://twitter.com"),
        _platform(SocialMediaType.LINKEDIN, "LinkedIn", "https://www.linkedin.com/company/tu-empresa",
                  r"^https?://(www\.)?linkedin\.com/.+", "https://www.linkedin.com"),
        _platform(SocialMediaType.YOUTUBE, "YouTube", "https://www.youtube.com/@tu-empresa",
                  r"^https?://(www\.)?(youtube\.com|youtu\.be)/.+", "https://www.youtube.com"),
        _platform(SocialMediaType.TIKTOK, "TikTok", "https://www.tiktok.com/@tu-empresa",
                  r"^https?://(www\.)?tiktok\.com/@.+", "https://www.tiktok.com"),
        _platform(SocialMediaType.WHATSAPP, "WhatsApp Business", "https://wa.me/1234567890",
                  r"^https?://(wa\.me|api\.whatsapp\.com)/.+", "https://wa.me"),
        _platform(SocialMediaType.PINTEREST, "Pinterest", "https://www.pinterest.com/tu-empresa",
                  r"^https?://(www\.)?pinterest\.com/.+", "https://www.pinterest.com"),
        _platform(SocialMediaType.SNAPCHAT, "Snapchat", "https://www.snapchat.com/add/tu-empresa",
                  r"^https?://(www\.)?snapchat\.com/.+", "https://www.snapchat.com"),
        _platform(SocialMediaType.THREADS, "Threads", "https://www.threads.net/@tu-empresa",
                  r"^https?://(www\.)?threads\.net/@.+", "https://www.threads.net"),
    )
}


def get_platform_config(type_: SocialMediaType | str) -> PlatformConfig:
    return SOCIAL_MEDIA_CONFIGS[SocialMediaType(type_)]


def validate_social_media_url(url: str, type_: SocialMediaType | str) -> bool:
    try:
        config = get_platform_config(type_)
    except ValueError:
        return False
    return bool(config.url_pattern.match(url))
