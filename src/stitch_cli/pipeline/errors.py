"""Pipeline faults."""


class PipelineError(Exception):
    """Internal pipeline fault.

    Raised for programming errors only (a pipeline that never produced a
    result, a step overwriting one, or a step running without the state an
    earlier step should have set). Never rendered as a user error.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
