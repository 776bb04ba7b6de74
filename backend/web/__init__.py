"""
Browser front end served by app.py: the page lives in web/templates/.
"""

import os

TEMPLATE_FOLDER = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")
