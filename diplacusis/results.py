"""Append-only CSV records of locked pitch matches, one file per day."""

import csv
import logging
import os

HEADER = ['Reference note', 'Comparison note']


class ResultSink:
    """Writes (reference note, comparison note) rows to the day's record.

    Example Usage:
        >>> sink = ResultSink("results")
        >>> sink.append(datetime.date(2024, 3, 1), 70, 67)
        >>> sink.read(datetime.date(2024, 3, 1))
        [(70, 67)]
    """

    def __init__(self, results_path='results'):
        self.results_path = results_path

    @staticmethod
    def filename_for(date):
        return 'results_{}.csv'.format(date.strftime('%Y-%m-%d'))

    def path_for(self, date):
        return os.path.join(self.results_path, self.filename_for(date))

    def append(self, date, reference_note, comparison_note):
        """Append one row, creating the record with a header if it is new.

        Existing rows are never rewritten. Returns the path of the record.
        """
        path = self.path_for(date)
        is_new = not os.path.exists(path)
        try:
            with open(path, 'a', newline='', encoding='utf-8') as csvfile:
                writer = csv.writer(csvfile)
                if is_new:
                    writer.writerow(HEADER)
                writer.writerow([int(reference_note), int(comparison_note)])
        except OSError as e:
            logging.warning(f"Cannot write results file: {e}")
            raise
        logging.info("saved %s,%s to %s", reference_note, comparison_note,
                     path)
        return path

    def read(self, date):
        """Return the day's rows as (reference, comparison) tuples in order.

        A missing record reads as an empty list.
        """
        path = self.path_for(date)
        if not os.path.exists(path):
            return []
        return read_rows(path)


def read_rows(path):
    with open(path, 'r', newline='', encoding='utf-8') as csvfile:
        reader = csv.reader(csvfile)
        return [(int(ref), int(comp)) for ref, comp in reader
                if [ref, comp] != HEADER]
