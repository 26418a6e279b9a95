"""Engine failure taxonomy.

Engine internals raise these; LifeEngine converts them into an Outcome at
the operation boundary so a caller never sees an exception for a domain
failure. The codec raises CodecFailure directly to its callers.
"""


class LifeError(Exception):
    code = "life_error"


class InvalidInput(LifeError):
    """Unknown activity, job, person, or action id."""

    code = "invalid_input"


class PreconditionFailed(LifeError):
    code = "precondition_failed"


class AlreadyDeceasedError(PreconditionFailed):
    code = "deceased"


class NotQualifiedError(PreconditionFailed):
    code = "not_qualified"


class TooYoungError(PreconditionFailed):
    code = "too_young"


class PersonDeceasedError(PreconditionFailed):
    code = "person_deceased"


class UnemployedError(PreconditionFailed):
    code = "unemployed"


class CodecFailure(LifeError):
    """Persisted or imported data could not be decoded into a state."""

    code = "codec_failure"
