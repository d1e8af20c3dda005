"""Response number formats.

Staff:  ``NN/MM.YYYY``            NN = highest sequence of the month + 1
Client: ``CLIENT-NNssss/MM.YYYY`` NN = client responses created today + 1,
                                  ssss = last four digits of the ms timestamp

Sequences are zero-padded to two digits and grow wider past 99.
"""

import re
from datetime import datetime
from typing import Iterable

from rental_db.models.response import CLIENT_NUMBER_PREFIX

_SEQUENCE_RE = re.compile(r"^(\d+)/")


def month_token(when: datetime) -> str:
    """``MM.YYYY`` for the month of ``when``."""
    return f"{when.month:02d}.{when.year}"


def parse_sequence(response_number: str) -> int:
    """Leading sequence of a staff number; 0 for anything else."""
    match = _SEQUENCE_RE.match(response_number)
    return int(match.group(1)) if match else 0


def next_staff_sequence(existing: Iterable[str]) -> int:
    return max((parse_sequence(n) for n in existing), default=0) + 1


def format_staff_number(sequence: int, when: datetime) -> str:
    return f"{sequence:02d}/{month_token(when)}"


def format_client_number(sequence: int, when: datetime) -> str:
    millis = int(when.timestamp() * 1000)
    suffix = str(millis)[-4:]
    return f"{CLIENT_NUMBER_PREFIX}{sequence:02d}{suffix}/{month_token(when)}"
