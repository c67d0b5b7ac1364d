"""A question-and-answer HTTP service with an in-memory store, a greeting server and a client."""

__version__ = "0.1.0"