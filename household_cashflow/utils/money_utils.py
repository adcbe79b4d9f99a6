"""Money formatting utilities"""


def format_dollars(cents: int) -> str:
    """Render integer cents as a dollar string, e.g. 123456 -> "$1234.56" """
    sign = "-" if cents < 0 else ""
    whole, part = divmod(abs(cents), 100)
    return f"{sign}${whole}.{part:02d}"
