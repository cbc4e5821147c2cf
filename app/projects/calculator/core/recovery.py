"""
Timed auto-clear after a calculation error.

Only one recovery is ever pending: scheduling again replaces the deadline.
The schedule is a deadline rather than a timer thread so it can live in the
Flask session between requests; whoever handles the next input polls it.
"""
import logging
import time

from app.projects.calculator.core.constants import DEFAULT_ERROR_RESET_SECONDS

logger = logging.getLogger(__name__)


class ErrorRecovery:
    def __init__(self, delay=DEFAULT_ERROR_RESET_SECONDS, clock=time.time):
        self.delay = delay
        self.clock = clock
        self.deadline = None
        self.message = None

    @property
    def pending(self):
        return self.deadline is not None

    def schedule(self, message):
        """Show `message` until the calculator resets `delay` seconds from now."""
        if self.pending:
            logger.debug(f"Replacing pending recovery for {self.message!r}")
        self.message = message
        self.deadline = self.clock() + self.delay

    def cancel(self):
        self.deadline = None
        self.message = None

    def remaining(self):
        """Seconds until the reset fires, 0 if due, None if nothing is pending."""
        if not self.pending:
            return None
        return max(0.0, self.deadline - self.clock())

    def poll(self, engine):
        """Clear `engine` if the deadline has passed. Returns True if it fired."""
        if not self.pending or self.clock() < self.deadline:
            return False
        logger.debug(f"Auto-clearing calculator after error: {self.message}")
        engine.clear()
        self.cancel()
        return True

    def to_dict(self):
        return {"deadline": self.deadline, "message": self.message}

    @classmethod
    def from_dict(cls, data, delay=DEFAULT_ERROR_RESET_SECONDS, clock=time.time):
        recovery = cls(delay=delay, clock=clock)
        if isinstance(data, dict) and isinstance(data.get("deadline"), (int, float)):
            recovery.deadline = float(data["deadline"])
            recovery.message = data.get("message")
        return recovery
