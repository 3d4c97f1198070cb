"""Pure tones rendered to exactly one ear.

Every tone is written to either the left or the right channel only, the
other channel is kept silent so the reference and the comparison tone
reach different ears.
"""

import numpy as np
import sounddevice as sd
import logging

samplerate = 44100

_CHANNELS = {'left': 0, 'right': 1}


class AudioStream:
    """Blocking one-ear tone player.

    Each call to ``play`` renders a complete tone buffer with attack and
    release ramps and returns once the device has finished playing it.
    """

    def __init__(self, device, attack, release, tone_duration=1):
        if attack <= 0 or release <= 0:
            raise ValueError("attack and release have to be positive "
                             "and different from zero")
        if tone_duration <= 0:
            raise ValueError("tone_duration has to be positive")

        self._channels = 2
        try:
            if device is not None:
                devinfo = sd.query_devices(device)
                max_out = int(devinfo.get('max_output_channels', 2))
                if max_out < 2:
                    self._channels = 1
                    logging.warning(
                        f"Selected audio device only supports {max_out} output channel(s). "
                        "Both tones will be heard in the same ear."
                    )
        except (sd.PortAudioError, ValueError) as e:
            logging.warning(f"Could not query device capabilities: {e}. Assuming stereo support.")

        self._device = device
        self._tone_duration = tone_duration
        self._attack = int(np.round(_seconds2samples(attack / 1000)))
        self._release = int(np.round(_seconds2samples(release / 1000)))

    def render(self, freq, amplitude, earside):
        """Return the sample buffer for one tone, shape (frames, channels).

        Args:
            freq: Frequency in Hz
            amplitude: Linear peak amplitude, passed through unclamped
            earside: 'left' or 'right' - the only channel receiving the signal
        """
        if earside not in _CHANNELS:
            raise ValueError(f"earside must be 'left' or 'right', got '{earside}'")

        frames = int(np.round(_seconds2samples(self._tone_duration)))
        k = np.arange(frames)
        signal = amplitude * np.sin(2 * np.pi * freq * k / samplerate)

        # Ramps are shortened for tones shorter than attack + release
        attack = min(self._attack, frames // 2)
        release = min(self._release, frames - attack)
        envelope = np.ones(frames)
        envelope[:attack] = np.linspace(0, 1, attack, endpoint=False)
        if release:
            envelope[frames - release:] = np.linspace(1, 0, release)

        outdata = np.zeros((frames, self._channels), dtype=np.float32)
        if self._channels >= 2:
            outdata[:, _CHANNELS[earside]] = signal * envelope
        else:
            outdata[:, 0] = signal * envelope
        return outdata

    def play(self, freq, amplitude, earside):
        """Play one tone in the given ear and block until it has finished."""
        outdata = self.render(freq, amplitude, earside)
        logging.debug("play %.2f Hz amplitude %s on %s", freq, amplitude,
                      earside)
        sd.play(outdata, samplerate=samplerate, device=self._device,
                blocking=True)

    def close(self):
        sd.stop()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def _seconds2samples(seconds):
    """Convert seconds to number of samples at the current sample rate."""
    return samplerate * seconds
