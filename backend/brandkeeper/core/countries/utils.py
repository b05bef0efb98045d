REGIONAL_INDICATOR_A = 0x1F1E6


def get_country_flag(code: str | None) -> str:
    """ISO 3166-1 alpha-2 code to its regional-indicator flag emoji; "" if not two letters."""
    if not code or len(code) != 2:
        return ""
    code = code.upper()
    if not all("A" <= ch <= "Z" for ch in code):
        return ""
    return "".join(chr(REGIONAL_INDICATOR_A + ord(ch) - ord("A")) for ch in code)
