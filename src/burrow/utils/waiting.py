import logging
from typing import Callable, Optional

from burrow.interfaces.hardware import Hardware

logger = logging.getLogger(__name__)


def wait_until(
    condition: Callable[[], bool],
    hardware: Hardware,
    interval_s: float,
    timeout_s: Optional[float] = None,
    description: str = "",
) -> bool:
    """Poll ``condition`` every ``interval_s`` seconds of hardware idle time.

    Returns True as soon as the condition holds, False once ``timeout_s`` of
    idle time has passed. ``timeout_s=None`` waits indefinitely.
    """
    if interval_s <= 0:
        raise ValueError(f"interval_s must be positive, got {interval_s}")
    waited = 0.0
    while not condition():
        if timeout_s is not None and waited >= timeout_s:
            logger.warning(f"Gave up waiting{' for ' + description if description else ''} after {waited:.1f}s")
            return False
        hardware.idle(interval_s)
        waited += interval_s
    if waited and description:
        logger.debug(f"Waited {waited:.1f}s for {description}")
    return True
