import logging

logger = logging.getLogger(__name__)


def confirm(message: str, default: bool = True) -> bool:
    """Ask the operator a yes/no question on the terminal.

    An empty answer picks ``default``. End of input counts as "no", so an
    unattended run never walks into a risky decision.
    """
    suffix = "[Y/n]" if default else "[y/N]"
    try:
        answer = input(f"{message} {suffix} ")
    except EOFError:
        logger.debug(f"No answer to {message!r}, assuming no")
        return False
    answer = answer.strip().lower()
    if not answer:
        return default
    return answer in ("y", "yes")
