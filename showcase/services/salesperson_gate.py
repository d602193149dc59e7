"""
Salesperson sign-in gate.

A shared upload code plus a display name unlocks the photo upload view.
This is a convenience for the UI, not a security boundary: the flag lives in
memory, never expires, and the server keeps no session.
"""
from typing import Optional
import hmac
import logging

logger = logging.getLogger(__name__)

INVALID_SIGN_IN_MESSAGE = "Invalid code or missing name. Please try again."


class SalespersonGate:
    def __init__(self, upload_code: str, bypass_code: Optional[str] = None):
        self.upload_code = upload_code
        self.bypass_code = bypass_code
        self._authenticated = False
        self._salesperson_name = ""

    def check(self, name: str, code: str) -> bool:
        """True when the name is non-blank and the code matches."""
        if not (name or "").strip():
            return False
        code = code or ""
        if hmac.compare_digest(code.encode(), self.upload_code.encode()):
            return True
        return bool(self.bypass_code) and hmac.compare_digest(code.encode(), self.bypass_code.encode())

    def sign_in(self, name: str, code: str) -> bool:
        if not self.check(name, code):
            logger.info("Rejected salesperson sign-in")
            return False
        self._authenticated = True
        self._salesperson_name = name.strip()
        logger.info(f"Salesperson signed in: {self._salesperson_name}")
        return True

    def sign_out(self) -> None:
        self._authenticated = False
        self._salesperson_name = ""

    @property
    def authenticated(self) -> bool:
        return self._authenticated

    @property
    def salesperson_name(self) -> str:
        return self._salesperson_name
