"""
Message fatigue analysis feature.

CSV upload -> normalized events -> per-recipient and per-message metrics,
served through paginated list views, chart series and exports.
"""
