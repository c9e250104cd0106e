"""
Blueprint package: one sub-package per area of the UI, plus the
rendering helpers the two panels share (``panel_views``).
"""
