from pydantic import BaseModel, ValidationError

from ngram_finder.core.errors import InvalidParameterError


class ParameterModel(BaseModel):
    """
    Base for validated value models.

    Construction failures surface as InvalidParameterError instead of
    pydantic's ValidationError, so callers only deal with one error type.
    """

    def __init__(self, **data):
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise InvalidParameterError(f"Invalid {type(self).__name__} parameters: {e}") from e
