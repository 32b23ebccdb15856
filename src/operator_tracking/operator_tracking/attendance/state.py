"""Attendance state machine per (operator, date).

    NO_RECORD --clock_in--> CLOCKED_IN --clock_out--> CLOCKED_OUT

A pre-seeded absent row (no clock-in yet) counts as NO_RECORD. Every other
transition is rejected: clock-in with AlreadyClockedInError, clock-out with
NoActiveClockInError. A new calendar date starts again from NO_RECORD.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from ..core.exceptions import AlreadyClockedInError, NoActiveClockInError
from .model import AttendanceLog


class AttendanceState(str, Enum):
    NO_RECORD = "no_record"
    CLOCKED_IN = "clocked_in"
    CLOCKED_OUT = "clocked_out"

    @classmethod
    def of(cls, log: Optional[AttendanceLog]) -> "AttendanceState":
        if log is None or log.clock_in is None:
            return cls.NO_RECORD
        if log.clock_out is None:
            return cls.CLOCKED_IN
        return cls.CLOCKED_OUT


class AttendanceEvent(str, Enum):
    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"


_TRANSITIONS = {
    (AttendanceState.NO_RECORD, AttendanceEvent.CLOCK_IN): AttendanceState.CLOCKED_IN,
    (AttendanceState.CLOCKED_IN, AttendanceEvent.CLOCK_OUT): AttendanceState.CLOCKED_OUT,
}

_REJECTIONS = {
    AttendanceEvent.CLOCK_IN: AlreadyClockedInError,
    AttendanceEvent.CLOCK_OUT: NoActiveClockInError,
}


def transition(state: AttendanceState, event: AttendanceEvent) -> AttendanceState:
    """Next state, or raise the error named for the rejected event."""
    try:
        return _TRANSITIONS[(state, event)]
    except KeyError:
        raise _REJECTIONS[event]() from None
