"""Error types raised by the classifier, normalizer and validator."""


class PhilanthropyScraperError(Exception):
    """Base class for all package errors."""


class ReferenceFetchError(PhilanthropyScraperError):
    """The cause reference list could not be fetched or had an unexpected shape."""


class RecordError(PhilanthropyScraperError):
    """A single record could not be turned into a valid contribution."""


class MalformedRecordError(RecordError):
    """A raw record lacks a required field or has a field of the wrong shape."""


class ContributionValidationError(RecordError):
    """An assembled contribution fails the structural contract."""

    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems) or "invalid contribution")
