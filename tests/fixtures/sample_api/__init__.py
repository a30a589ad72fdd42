"""Sample scenario builder API documented by the test suite."""
