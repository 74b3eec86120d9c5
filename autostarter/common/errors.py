"""Fatal session error"""


class AutostartError(RuntimeError):
    """Unrecoverable condition that aborts the whole session

    Raised for unreadable configs, a missing resolution section, and failed
    process launches or window manager calls. Caught once, in the session
    entry point, which reports it and exits with the fatal exit code.
    """
