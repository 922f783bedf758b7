"""
friday.forms — Controllers behind the site's forms.

Each controller keeps its visible state in public attributes, converts every
async failure into an ``error`` message, and notifies subscribers on change.
"""
