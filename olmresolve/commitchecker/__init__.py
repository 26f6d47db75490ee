"""Validation of git commit summaries and authors over a revision range."""