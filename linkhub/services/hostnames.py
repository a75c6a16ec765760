"""Validation of the hostnames allowed to track conversions for a workspace."""
import re
from typing import List

from linkhub.exceptions import ApiError

_LABEL = r'[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?'
DOMAIN_RE = re.compile(rf'^(?:{_LABEL}\.)+[a-z]{{2,63}}$')


def is_valid_domain_format(domain: str) -> bool:
    return len(domain) <= 253 and DOMAIN_RE.match(domain) is not None


def is_valid_hostname(hostname: str) -> bool:
    """Plain domains, *.wildcard domains and localhost are accepted."""
    if hostname == 'localhost':
        return True
    if hostname.startswith('*.'):
        return is_valid_domain_format(hostname[2:])
    return is_valid_domain_format(hostname)


def validate_allowed_hostnames(allowed_hostnames: List[str]) -> List[str]:
    """
    Normalize a list of hostnames (trimmed, lower-cased, de-duplicated).

    Raises:
        ApiError: unprocessable_entity listing every invalid entry
    """
    normalized = []
    invalid = []
    for hostname in allowed_hostnames:
        value = hostname.strip().lower()
        if not is_valid_hostname(value):
            invalid.append(hostname)
        elif value not in normalized:
            normalized.append(value)

    if invalid:
        raise ApiError('unprocessable_entity', f"Invalid hostnames: {', '.join(invalid)}")
    return normalized
