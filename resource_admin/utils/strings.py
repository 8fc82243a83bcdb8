# ================================
# STRING UTILITIES (utils/strings.py)
# ================================

import re

_CAMEL_BOUNDARY = re.compile(r'(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])')


def snake_case(value: str) -> str:
    """
    Convert CamelCase / kebab-case / spaced text to snake_case

    Examples:
        "ProformaInvoice" -> "proforma_invoice"
        "HTTPRequestLog" -> "http_request_log"
    """
    value = _CAMEL_BOUNDARY.sub('_', value.strip())
    value = re.sub(r'[\s\-]+', '_', value)
    return re.sub(r'_+', '_', value).lower()


def kebab_case(value: str) -> str:
    return snake_case(value).replace('_', '-')


def title_case(value: str) -> str:
    """'pending_review' / 'pending-review' -> 'Pending Review'"""
    words = re.sub(r'[_\-]+', ' ', value).split()
    return ' '.join(word[:1].upper() + word[1:] for word in words)


def pluralize(word: str) -> str:
    """English plural for model names ("Category" -> "Categories")"""
    if not word:
        return word

    lower = word.lower()
    if lower.endswith('y') and lower[-2:-1] not in ('a', 'e', 'i', 'o', 'u'):
        return word[:-1] + 'ies'
    if lower.endswith(('s', 'x', 'z', 'ch', 'sh')):
        return word + 'es'
    return word + 's'
