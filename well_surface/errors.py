class SurfaceError(Exception):
    """Base error; ``stage`` names the pipeline step that failed."""
    stage = 'surface'

    def __init__(self, *args, stage: str = None):
        super().__init__(*args)
        if stage:
            self.stage = stage

    def __str__(self):
        return f'[{self.stage}] {super().__str__()}'

class EmptyInputError(SurfaceError):
    stage = 'extent'

class InvalidResolutionError(SurfaceError, ValueError):
    stage = 'grid'

class InvalidPowerError(SurfaceError, ValueError):
    stage = 'interpolate'

class InvalidMaxPointsError(SurfaceError, ValueError):
    stage = 'interpolate'

class MissingFieldError(SurfaceError, ValueError):
    stage = 'load'

class MalformedFieldError(SurfaceError, ValueError):
    stage = 'load'

    def __init__(self, position: int, field: str, value):
        super().__init__(f'record {position}: field {field!r} is not a number: {value!r}')
        self.position = position
        self.field = field
        self.value = value

class ProjectionError(SurfaceError):
    stage = 'projection'

class SinkWriteError(SurfaceError):
    stage = 'write'
