"""
CSV export of scored steps.
"""

import numpy as np
import pandas as pd

CSV_COLUMNS = ['timestamp', 'erraticism']


def scores_to_frame(scored):
    """Build a two-column DataFrame (timestamp, erraticism) in input order."""
    return pd.DataFrame({
        'timestamp': np.array([s.timestamp for s in scored], dtype=np.int64),
        'erraticism': np.array([s.score for s in scored], dtype=float),
    }, columns=CSV_COLUMNS)


def write_scores_csv(scored, path):
    """
    Write scored steps as `timestamp,erraticism` CSV.

    Raises:
        OSError: If the output file cannot be created
    """
    scores_to_frame(scored).to_csv(path, index=False, float_format='%.6f')
