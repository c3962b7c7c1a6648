"""
Browser Agent - a completion-model driven browser over HTTP.

Lets a text-completion model control headless Chromium via Playwright
through a fixed command vocabulary until it answers the user's query.
"""

__version__ = "0.1.0"
__author__ = "Browser Agent Contributors"
