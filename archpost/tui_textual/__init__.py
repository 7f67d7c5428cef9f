"""
Textual front end for the checklist navigator.
"""
