"""
Password strength policy applied wherever a new password is set.
"""

import re
from typing import List

MIN_LENGTH = 8
# bcrypt only looks at the first 72 bytes
MAX_BYTES = 72

_SYMBOL = re.compile(r"[^A-Za-z0-9]")


def password_violations(password: str) -> List[str]:
    """Return every rule the password breaks (empty list when it is acceptable)."""
    violations = []
    if len(password) < MIN_LENGTH:
        violations.append(f"The password must be at least {MIN_LENGTH} characters.")
    if len(password.encode("utf-8")) > MAX_BYTES:
        violations.append(f"The password must not be longer than {MAX_BYTES} bytes.")
    if not (re.search(r"[a-z]", password) and re.search(r"[A-Z]", password)):
        violations.append("The password must contain uppercase and lowercase letters.")
    if not re.search(r"\d", password):
        violations.append("The password must contain at least one number.")
    if not _SYMBOL.search(password):
        violations.append("The password must contain at least one symbol.")
    return violations
