"""Collaborators that move area tables in and out of the drawing and the workbook."""
