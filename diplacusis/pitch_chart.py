"""Pitch match chart."""

# Set matplotlib backend BEFORE importing pyplot
import matplotlib
matplotlib.use('Agg')

import numpy as np
import matplotlib.pyplot as plt
import os

from diplacusis import notes
from diplacusis import results


def set_chart_parameters(reference_notes, comparison_notes, ax=None,
                         **kwargs):
    """Plot the pitch deviation of the right ear per reference note.

    Parameters
    ----------
    reference_notes : array_like
          Piano note indices played to the left ear
    comparison_notes : array_like
          Piano note indices the subject matched in the right ear
    ax: plt.Ax, optional
          Matplotlib Ax to plot on
    Returns
    -------
    plt.Axis
        Matplotlib axis containing the plot.

    """
    if ax is None:
        ax = plt.gca()
    reference_notes = np.asarray(reference_notes)
    deviation = np.asarray(comparison_notes) - reference_notes

    ax.set_xlabel("Reference note (A4 = {})".format(notes.A4_NOTE))
    ax.set_ylabel("Deviation / semitones")
    limit = max(6, int(np.abs(deviation).max()) + 1)
    ax.set_ylim([-limit, limit])
    ax.set_yticks(np.arange(-limit, limit + 1, 1))
    ax.axhline(0, color='k', linewidth=1, zorder=1,
               label='Perfect match')
    secax = ax.secondary_xaxis(
        'top', functions=(notes.frequency_of, _note_of_frequency))
    secax.set_xlabel("f / Hz")
    ax.grid(which='both')
    ax.set_title('Pitch match - right ear vs. left ear')
    lines = ax.plot(reference_notes, deviation, color='r', marker='o',
                    markersize=8, linestyle='none', fillstyle='none',
                    label='Locked matches', **kwargs)
    ax.legend(loc='best')
    return lines


def make_chart(filename, results_path=None):

    if results_path is None:
        results_path = 'results'

    data = results.read_rows(os.path.join(results_path, filename))
    if not data:
        raise ValueError("{} contains no results".format(filename))
    reference_notes, comparison_notes = _extract_parameters(data)

    f = plt.figure(figsize=(9, 6))
    set_chart_parameters(reference_notes, comparison_notes)

    base_filename = os.path.splitext(filename)[0]
    pdf_path = os.path.join(results_path, base_filename + '.pdf')
    f.savefig(pdf_path, dpi=300, bbox_inches='tight')
    print(f"Chart saved to: {pdf_path}")

    png_path = os.path.join(results_path, base_filename + '.png')
    f.savefig(png_path, dpi=150, bbox_inches='tight', format='png')

    plt.close(f)
    return pdf_path, png_path


def _extract_parameters(data):
    parameters = sorted(data)
    reference_notes = [ref for ref, comp in parameters]
    comparison_notes = [comp for ref, comp in parameters]
    return reference_notes, comparison_notes


def _note_of_frequency(freq):
    freq = np.maximum(freq, 1e-9)
    return notes.A4_NOTE + 12 * np.log2(freq / notes.A4_FREQ)
