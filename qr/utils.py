import ipaddress
import string
import secrets

from .policy import UNKNOWN_USER_AGENT


def generate_short_code(length=12):
    alphabet = string.ascii_uppercase + string.digits
    return ''.join(secrets.choice(alphabet) for _ in range(length))


def _valid_ip(value):
    try:
        return str(ipaddress.ip_address(value.strip()))
    except ValueError:
        return ''


def client_ip(request):
    """First hop of X-Forwarded-For if it is an IP address, then REMOTE_ADDR, then empty."""
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR', '')
    if forwarded:
        first = _valid_ip(forwarded.split(',')[0])
        if first:
            return first
    return _valid_ip(request.META.get('REMOTE_ADDR') or '')


def client_user_agent(request):
    return request.headers.get('User-Agent') or UNKNOWN_USER_AGENT
