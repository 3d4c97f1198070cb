"""Unit tests for the controller module."""

import unittest
from unittest.mock import patch, MagicMock, call
import datetime
import sys
import os
import tempfile
import shutil

# Add parent directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from diplacusis import controller
from diplacusis import notes


class TestControllerConfig(unittest.TestCase):
    """Test controller configuration."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.test_dir)
        self.results_path = os.path.join(self.test_dir, 'results')

    def test_config_defaults(self):
        cfg = controller.config(['--results-path', self.results_path])
        self.assertEqual(cfg.device, None)
        self.assertEqual(cfg.note_min, 51)
        self.assertEqual(cfg.note_max, 108)
        self.assertEqual(cfg.step, 5)
        self.assertEqual(cfg.max_offset, 5)
        self.assertEqual(cfg.volume, 0.1)
        self.assertEqual(cfg.tone_duration, 1)
        self.assertFalse(cfg.no_chart)
        self.assertFalse(cfg.logging)

    def test_results_path_created(self):
        controller.config(['--results-path', self.results_path])
        self.assertTrue(os.path.isdir(self.results_path))

    @patch('sys.argv', ['pitch_matching.py', '--device', '2',
                        '--note-min', '60', '--note-max', '72'])
    def test_config_from_sys_argv(self):
        with patch('os.path.exists', return_value=True):
            cfg = controller.config()
        self.assertEqual(cfg.device, 2)
        self.assertEqual(cfg.note_min, 60)
        self.assertEqual(cfg.note_max, 72)

    def test_note_range_rejected(self):
        with patch('sys.stderr'):
            with self.assertRaises(SystemExit):
                controller.config(['--note-min', '80', '--note-max', '70',
                                   '--results-path', self.results_path])

    def test_step_rejected(self):
        with patch('sys.stderr'):
            with self.assertRaises(SystemExit):
                controller.config(['--step', '0',
                                   '--results-path', self.results_path])


class TestController(unittest.TestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.test_dir)
        self.cfg = controller.config(['--results-path', self.test_dir])

    @patch('diplacusis.controller.tone_generator.AudioStream')
    @patch('diplacusis.controller.responder.Responder')
    def test_play_pair_left_then_right(self, mock_responder, mock_audio):
        ctrl = controller.Controller(self.cfg)
        ctrl.play_pair(69, 81, 0.2)
        self.assertEqual(mock_audio.return_value.play.call_args_list,
                         [call(440.0, 0.2, 'left'),
                          call(notes.frequency_of(81), 0.2, 'right')])

    @patch('diplacusis.controller.tone_generator.AudioStream')
    @patch('diplacusis.controller.responder.Responder')
    def test_read_key(self, mock_responder, mock_audio):
        mock_responder.return_value.read_key.return_value = '#'
        ctrl = controller.Controller(self.cfg)
        self.assertEqual(ctrl.read_key(), '#')

    @patch('diplacusis.controller.tone_generator.AudioStream')
    @patch('diplacusis.controller.responder.Responder')
    def test_save_results_returns_record_path(self, mock_responder, mock_audio):
        ctrl = controller.Controller(self.cfg)
        date = datetime.date(2024, 3, 1)
        path = ctrl.save_results(70, 67, date=date)
        self.assertEqual(path, os.path.join(self.test_dir,
                                            'results_2024-03-01.csv'))
        self.assertEqual(ctrl._sink.read(date), [(70, 67)])

    @patch('diplacusis.controller.tone_generator.AudioStream')
    @patch('diplacusis.controller.responder.Responder')
    @patch('diplacusis.controller.datetime')
    def test_save_results_defaults_to_today(self, mock_datetime,
                                            mock_responder, mock_audio):
        mock_datetime.date.today.return_value = datetime.date(2024, 3, 2)
        ctrl = controller.Controller(self.cfg)
        path = ctrl.save_results(70, 67)
        self.assertEqual(os.path.basename(path), 'results_2024-03-02.csv')

    @patch('diplacusis.controller.tone_generator.AudioStream')
    @patch('diplacusis.controller.responder.Responder')
    def test_close_releases_resources(self, mock_responder, mock_audio):
        with controller.Controller(self.cfg):
            pass
        mock_responder.return_value.close.assert_called_once()
        mock_audio.return_value.close.assert_called_once()

    @patch('diplacusis.controller.tone_generator.AudioStream')
    @patch('diplacusis.controller.responder.Responder')
    def test_keyboard_failure_closes_audio(self, mock_responder, mock_audio):
        mock_responder.side_effect = RuntimeError("no keyboard")
        with self.assertRaises(RuntimeError):
            controller.Controller(self.cfg)
        mock_audio.return_value.close.assert_called_once()


if __name__ == '__main__':
    unittest.main()
