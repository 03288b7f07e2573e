"""
Generated mailbox credentials for invited employees.
"""

import re
import secrets
import string

SYMBOLS = "!@#$%^&*"

MAILBOX_DOMAINS = {
    "gmail": "gmail.com",
    "outlook": "outlook.com",
    "zoho": "zohomail.com",
}


def _clean(value: str, limit: int) -> str:
    return re.sub(r"[^a-z0-9]", "", value.lower())[:limit]


def generate_mailbox_address(
    name: str, company_name: str, strategy: str = "gmail", company_domain: str = ""
) -> str:
    """<name>.<company>@<provider>; 'forwarding' uses the company's own domain"""
    local = f"{_clean(name, 15) or 'employee'}.{_clean(company_name, 10) or 'company'}"
    if strategy == "forwarding" and company_domain:
        return f"{local}@{company_domain.lower()}"
    return f"{local}@{MAILBOX_DOMAINS.get(strategy, MAILBOX_DOMAINS['gmail'])}"


def generate_temporary_password(length: int = 12) -> str:
    """Random password with at least one upper, lower, digit and symbol"""
    if length < 4:
        raise ValueError("length must be at least 4")
    pools = [string.ascii_uppercase, string.ascii_lowercase, string.digits, SYMBOLS]
    alphabet = "".join(pools)
    chars = [secrets.choice(pool) for pool in pools]
    chars += [secrets.choice(alphabet) for _ in range(length - len(pools))]
    secrets.SystemRandom().shuffle(chars)
    return "".join(chars)
