"""ScholarMatch: scholarship eligibility matching with AI explanations."""

__version__ = "0.1.0"
