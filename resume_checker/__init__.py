"""Resume Checker - ATS-style evaluation of a resume against a job title."""

__version__ = "0.1.0"
