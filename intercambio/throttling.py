from rest_framework.throttling import AnonRateThrottle


class LoginRateThrottle(AnonRateThrottle):
    """Per-IP limit for login and registration, rate ``THROTTLE_LOGIN``."""
    scope = 'login'
