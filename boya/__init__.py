"""Scheduled course selection for the Boya extracurricular program."""
