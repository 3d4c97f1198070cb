"""Pitch matching method.

For every reference note of the schedule a tone is played in the left ear,
followed by a comparison tone in the right ear. The subject shifts the
comparison note until both tones sound alike and locks the pair in.
A pitch difference between the ears at the same frequency is called
diplacusis.
"""

import logging
import os
from dataclasses import dataclass, field

from diplacusis import controller
from diplacusis import pitch_chart
from diplacusis import trials
from diplacusis.trials import TrialState

INSTRUCTIONS = (
    "Welcome to the diplacusis hearing test!\n"
    "Instructions:\n"
    "  - w/d keys to change the right ear frequency.\n"
    "  - + and - keys to change the volume.\n"
    "  - Space key to replay the frequencies.\n"
    "  - # key to lock in frequencies.\n"
    "  - q key to abort the test.\n"
    "The test will end when enough coverage of the frequency band is "
    "reached."
)


@dataclass
class Session:
    """State that lives across trials: schedule, locked results, volume.

    result_files holds every record written to, in order of first use; a
    session running past midnight writes to two daily records.
    """
    schedule: list
    results: list = field(default_factory=list)
    result_files: list = field(default_factory=list)
    volume: float = 0.1
    aborted: bool = False

    @property
    def complete(self):
        return len(self.results) == len(self.schedule)


def apply_key(trial, session, key, note_min, note_max):
    """Apply one key press to the trial and return its next state.

    'w' raises and 'd' lowers the comparison note by one, clamped to the
    note range. '+' and '-' change the session volume by 0.1 without any
    clamping. '#' locks the trial, 'q' aborts the session, every other key
    (space included) just replays the tones.
    """
    if key == 'w':
        trial.comparison_note = min(trial.comparison_note + 1, note_max)
    elif key == 'd':
        trial.comparison_note = max(trial.comparison_note - 1, note_min)
    elif key == '+':
        session.volume = (session.volume * 10 + 1) / 10
    elif key == '-':
        session.volume = (session.volume * 10 - 1) / 10
    elif key == '#':
        trial.state = TrialState.LOCKED
    elif key == 'q':
        trial.state = TrialState.ABORTED
    return trial.state


class PitchMatching:

    def __init__(self, cfg=None, ctrl=None):
        self.ctrl = ctrl if ctrl is not None else controller.Controller(cfg)
        cfg = self.ctrl.config
        self.note_min = cfg.note_min
        self.note_max = cfg.note_max
        self.max_offset = cfg.max_offset
        self.session = Session(trials.stimulus_schedule(self.note_min,
                                                        self.note_max,
                                                        cfg.step),
                               volume=cfg.volume)

    def adjustment_loop(self, trial):
        """Play, wait for one key, apply it; until the trial is finished."""
        while not trial.finished:
            self.ctrl.play_pair(trial.reference_note, trial.comparison_note,
                                self.session.volume)
            key = self.ctrl.read_key()
            state = apply_key(trial, self.session, key, self.note_min,
                              self.note_max)
            logging.info("key:%r comparison:%s volume:%s state:%s", key,
                         trial.comparison_note, self.session.volume,
                         state.name)

        if trial.state is TrialState.LOCKED:
            print("Locked frequencies: Left: {:.2f} Hz, Right: {:.2f} Hz"
                  .format(trial.reference_frequency,
                          trial.comparison_frequency))
        return trial.state

    def lock(self, trial):
        result = (trial.reference_note, trial.comparison_note)
        self.session.results.append(result)
        path = self.ctrl.save_results(*result)
        if path not in self.session.result_files:
            self.session.result_files.append(path)

    def run(self):

        print("Notes: {}".format(self.session.schedule))
        print(INSTRUCTIONS)

        for reference_note in self.session.schedule:
            trial = trials.make_trial(reference_note, self.note_min,
                                      self.note_max, self.max_offset)
            logging.info('reference:%s comparison:%s', trial.reference_note,
                         trial.comparison_note)

            if self.adjustment_loop(trial) is TrialState.ABORTED:
                self.session.aborted = True
                logging.info("aborted after %d results",
                             len(self.session.results))
                print("Test aborted.")
                return

            self.lock(trial)

            if self.session.complete:
                break

        print("Test completed. Results saved to {}".format(
            ", ".join(self.session.result_files)))

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.ctrl.__exit__()
        if self.ctrl.config.no_chart:
            return
        for path in self.session.result_files:
            pitch_chart.make_chart(os.path.basename(path),
                                   os.path.dirname(path))
