# SchoolDesk - record identifiers
import random
import string
import time

_ALPHABET = string.digits + string.ascii_lowercase

STUDENT_PREFIX = "stu"
TEACHER_PREFIX = "tch"
CLASS_PREFIX = "cls"
ENROLLMENT_PREFIX = "enr"


def generate_id(prefix: str) -> str:
    """Opaque id: prefix, epoch millis and 6 random base36 chars, e.g. stu_1700000000000_k3x9qa."""
    rand = "".join(random.choices(_ALPHABET, k=6))
    return f"{prefix}_{int(time.time() * 1000)}_{rand}"
