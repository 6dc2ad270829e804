"""
Word Feature Errors

Raised by the word-significance pipeline when the corpus cannot support the
statistics being asked of it.
"""


class WordFeatureError(ValueError):
    """Base class for word feature pipeline failures"""


class DegenerateCorpusError(WordFeatureError):
    """Corpus has no approved or no rejected records, so the test is undefined"""

    def __init__(self, total_acceptance: int, total_rejection: int):
        self.total_acceptance = total_acceptance
        self.total_rejection = total_rejection
        super().__init__(
            f'Degenerate corpus: {total_acceptance} approved and '
            f'{total_rejection} rejected records. Both classes are required '
            f'for a rejection significance test.'
        )


class InvalidLabelError(WordFeatureError):
    """A record label fell outside {0, 1}"""

    def __init__(self, invalid_labels):
        self.invalid_labels = sorted(set(invalid_labels), key=repr)
        super().__init__(
            f'Labels must be 0 (approved) or 1 (rejected), got: {self.invalid_labels}. '
            f'Indeterminate outcomes must be filtered before word statistics.'
        )
