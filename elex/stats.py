"""Statistical description of annotation tables: per-tier counts and
durations.

"""

# License: BSD3

import pandas as pd

TIER_SUMMARY_COLS = [
    'TIER_ID',
    'annotations',
    'timed',
    'total_duration',
    'mean_duration',
    'median_duration',
]


def tier_summary(df):
    """Summarise the annotations of each tier.

    Parameters
    ----------
    df : pandas.DataFrame
        Annotation table, as produced by
        `elex.eaf.extract_annotations`

    Returns
    -------
    summary : pandas.DataFrame
        One row per tier, in order of first appearance, with the number
        of annotations, the number of them with a known duration
        ('timed'), and the total, mean and median of the known durations
    """
    if df.empty:
        return pd.DataFrame(columns=TIER_SUMMARY_COLS)
    grouped = df.groupby('TIER_ID', sort=False, dropna=False)['DURATION']
    summary = pd.DataFrame({
        'annotations': grouped.size(),
        'timed': grouped.count(),
        'total_duration': grouped.sum(min_count=1),
        'mean_duration': grouped.mean(),
        'median_duration': grouped.median(),
    })
    summary = summary.reset_index()
    return summary[TIER_SUMMARY_COLS]


def value_counts(df, tier_id):
    """How often each annotation value occurs on a tier

    Returns
    -------
    counts : pandas.DataFrame
        Columns 'ANNOTATION_VALUE' and 'count', most frequent first
    """
    values = df.loc[df['TIER_ID'] == tier_id, 'ANNOTATION_VALUE']
    counts = values.value_counts()
    return pd.DataFrame({'ANNOTATION_VALUE': counts.index,
                         'count': counts.to_numpy()})
