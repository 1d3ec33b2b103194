"""
The CONTROLLER layer bridges external collaborators (health data) and the
Qt application. Errors from collaborators stop here.
"""
