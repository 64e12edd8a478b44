"""Satellite pass selection learner.

Simulates battery-powered remote transmitters that learn, from their own
transmission successes and failures, which satellite passes are worth
attempting, and converts the resulting behavior into modem power draw.
"""

__version__ = "0.1.0"
