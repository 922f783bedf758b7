"""
friday.api — HTTP routes owned by the site itself (FastAPI).
"""
