"""Piano note indices and their equal-tempered frequencies."""

NOTE_MIN = 51
NOTE_MAX = 108

A4_NOTE = 69
A4_FREQ = 440.0


def frequency_of(note):
    """Return the frequency in Hz of a piano note index.

    Note 69 (A4) maps to exactly 440 Hz and every 12 notes double the
    frequency. Any integer is accepted, callers restrict the range.
    """
    return A4_FREQ * 2 ** ((note - A4_NOTE) / 12)


def clamp_note(note, note_min=NOTE_MIN, note_max=NOTE_MAX):
    return max(note_min, min(note, note_max))
