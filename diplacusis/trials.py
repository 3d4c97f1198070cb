"""Stimulus schedule and trial construction."""

import enum
import random
from dataclasses import dataclass

from diplacusis import notes


class TrialState(enum.Enum):
    PLAYING = 'playing'
    LOCKED = 'locked'
    ABORTED = 'aborted'


@dataclass
class Trial:
    """One reference note and the comparison note the subject adjusts.

    Frequencies are derived from the notes on every access.
    """
    reference_note: int
    comparison_note: int
    state: TrialState = TrialState.PLAYING

    @property
    def reference_frequency(self):
        return notes.frequency_of(self.reference_note)

    @property
    def comparison_frequency(self):
        return notes.frequency_of(self.comparison_note)

    @property
    def finished(self):
        return self.state is not TrialState.PLAYING


def stimulus_schedule(note_min=notes.NOTE_MIN, note_max=notes.NOTE_MAX,
                      step=5):
    """Return the reference notes note_min, note_min + step, ... <= note_max."""
    if step <= 0:
        raise ValueError("step has to be positive, got {}".format(step))
    return list(range(note_min, note_max + 1, step))


def initial_comparison_note(reference_note, note_min=notes.NOTE_MIN,
                            note_max=notes.NOTE_MAX, max_offset=5, rng=None):
    """Draw a random starting note within max_offset of the reference."""
    if rng is None:
        rng = random
    offset = rng.randint(-max_offset, max_offset)
    return notes.clamp_note(reference_note + offset, note_min, note_max)


def make_trial(reference_note, note_min=notes.NOTE_MIN,
               note_max=notes.NOTE_MAX, max_offset=5, rng=None):
    comparison_note = initial_comparison_note(reference_note, note_min,
                                              note_max, max_offset, rng)
    return Trial(reference_note, comparison_note)
