"""Canonical form for user-supplied email addresses."""

GMAIL_DOMAINS = {"gmail.com", "googlemail.com"}
OUTLOOK_DOMAINS = {"hotmail.com", "live.com", "outlook.com"}
ICLOUD_DOMAINS = {"icloud.com", "me.com"}
YAHOO_DOMAINS = {"yahoo.com", "ymail.com", "rocketmail.com"}


def normalize_email(address: str) -> str:
    """
    Return the canonical form of an already-validated email address.

    The whole address is lowercased. For providers that ignore them,
    sub-address tags are dropped (``+tag`` for Gmail, Outlook and iCloud,
    ``-tag`` for Yahoo), dots are removed from Gmail local parts and
    ``googlemail.com`` is folded into ``gmail.com``.

    Args:
        address: Syntactically valid email address

    Returns:
        The canonical address
    """
    local, _, domain = address.strip().lower().rpartition("@")
    if not local:
        return address.strip().lower()

    if domain in GMAIL_DOMAINS:
        local = local.split("+", 1)[0].replace(".", "")
        domain = "gmail.com"
    elif domain in OUTLOOK_DOMAINS or domain in ICLOUD_DOMAINS:
        local = local.split("+", 1)[0]
    elif domain in YAHOO_DOMAINS:
        local = local.split("-", 1)[0]

    # A tag-only local part such as "+promo" would otherwise become empty.
    if not local:
        return address.strip().lower()
    return f"{local}@{domain}"
