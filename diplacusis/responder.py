"""The responder module collects the subject's key presses."""

import logging
import queue
try:
    from pynput import keyboard
except ImportError:
    # No keyboard backend (e.g. headless system); Responder() refuses to start
    keyboard = None

# Held together with the key that is meant, never a key of their own
_MODIFIERS = ('shift', 'shift_l', 'shift_r', 'ctrl', 'ctrl_l', 'ctrl_r',
              'alt', 'alt_l', 'alt_r', 'alt_gr', 'cmd', 'cmd_l', 'cmd_r')


class Responder:

    def __init__(self):
        """Start listening to the keyboard.

        Raises:
            RuntimeError: if no keyboard backend is available
        """
        if keyboard is None:
            raise RuntimeError("No keyboard backend available. "
                               "pynput needs a desktop session to read keys.")
        self._keys = queue.Queue()
        self._modifiers = tuple(getattr(keyboard.Key, name) for name in _MODIFIERS
                                if hasattr(keyboard.Key, name))
        self._listener = keyboard.Listener(on_press=self._on_press)
        self._listener.start()

    def _on_press(self, key):
        """Internal listener callback, queues one entry per key press.

        Modifier keys are skipped, so Shift+3 arrives as a single '#'.
        """
        if key in self._modifiers:
            return
        char = getattr(key, 'char', None)
        if char is None:
            if key == keyboard.Key.space:
                char = ' '
            else:
                char = str(key)
        logging.debug("key %r", char)
        self._keys.put(char)

    def read_key(self):
        """Block until the next key press and return it.

        Printable keys are returned as their character, space as ' ' and
        any other key as its pynput name, e.g. 'Key.enter'.
        """
        return self._keys.get()

    def close(self):
        """Stop the keyboard listener."""
        self._listener.stop()

    def __exit__(self, *args):
        self.close()

    def __enter__(self):
        return self
