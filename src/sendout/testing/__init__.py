"""Test doubles for code that depends on ``EmailService``.

Not imported by the rest of the package; import it from test suites only.
"""

from sendout.testing.mock_sender import MockEmailService

__all__ = ["MockEmailService"]
