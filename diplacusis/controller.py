from diplacusis import tone_generator
from diplacusis import responder
from diplacusis import results
from diplacusis import notes
import argparse
import datetime
import os
import logging


def config(args=None):

    parser = argparse.ArgumentParser(fromfile_prefix_chars='@')
    parser.add_argument(
        "--device", help='How to select your soundcard is '
        'shown in http://python-sounddevice.readthedocs.org/en/0.3.3/'
        '#sounddevice.query_devices', type=int, default=None)
    parser.add_argument("--note-min", type=int, default=notes.NOTE_MIN,
                        help="Lowest piano note index (A4 = 69)")
    parser.add_argument("--note-max", type=int, default=notes.NOTE_MAX,
                        help="Highest piano note index")
    parser.add_argument("--step", type=int, default=5,
                        help="Distance between two reference notes")
    parser.add_argument("--max-offset", type=int, default=5,
                        help="The comparison note starts at a random note "
                        "at most this far from the reference note")
    parser.add_argument("--volume", type=float, default=0.1,
                        help="Initial linear amplitude of both tones")
    parser.add_argument("--tone-duration", type=float, default=1,
                        help="in seconds")
    parser.add_argument("--attack", type=float, default=30, help="in ms")
    parser.add_argument("--release", type=float, default=40, help="in ms")
    parser.add_argument("--results-path", type=str, default='results/')
    parser.add_argument("--no-chart", action='store_true', default=False,
                        help="Do not draw the pitch match chart at the end")
    parser.add_argument("--logging", action='store_true')

    # If args is None, argparse parses sys.argv
    parsed_args = parser.parse_args(args)

    if parsed_args.note_min > parsed_args.note_max:
        parser.error("--note-min must not be greater than --note-max")
    if parsed_args.step <= 0:
        parser.error("--step has to be positive")
    if parsed_args.max_offset < 0:
        parser.error("--max-offset must not be negative")

    if not os.path.exists(parsed_args.results_path):
        os.makedirs(parsed_args.results_path)

    return parsed_args


class Controller:
    """Wires the tone player, the key reader and the result sink together."""

    def __init__(self, cfg=None):
        self.config = cfg if cfg is not None else config(args=[])

        self._sink = results.ResultSink(self.config.results_path)
        self._audio = tone_generator.AudioStream(self.config.device,
                                                 self.config.attack,
                                                 self.config.release,
                                                 self.config.tone_duration)
        try:
            self._rpd = responder.Responder()
        except Exception:
            self._audio.close()
            raise

    def play_pair(self, reference_note, comparison_note, volume):
        """Play the reference tone left, then the comparison tone right."""
        self._audio.play(notes.frequency_of(reference_note), volume, 'left')
        self._audio.play(notes.frequency_of(comparison_note), volume, 'right')

    def read_key(self):
        return self._rpd.read_key()

    def save_results(self, reference_note, comparison_note, date=None):
        """Append the pair to the day's record and return its path."""
        if date is None:
            date = datetime.date.today()
        return self._sink.append(date, reference_note, comparison_note)

    def close(self):
        """Release the audio stream and the keyboard listener."""
        try:
            self._rpd.close()
        finally:
            self._audio.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
