"""Request payload schemas.

Every write route validates its body here before any transaction opens;
pydantic errors are flattened into ``ValidationError.fields``.
"""
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from wordgroups.errors import ValidationError
from wordgroups.models import CATEGORY_COLORS, CATEGORIES_PER_PUZZLE, WORDS_PER_CATEGORY


def _required_text(value: str, label: str, max_length: int) -> str:
    value = (value or '').strip()
    if not value:
        raise ValueError(f"{label} must not be empty")
    if len(value) > max_length:
        raise ValueError(f"{label} must be at most {max_length} characters")
    return value


class GroupCreate(BaseModel):
    name: str
    member_name: str

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _required_text(v, 'Group name', 64)

    @field_validator('member_name')
    @classmethod
    def validate_member_name(cls, v):
        return _required_text(v, 'Member name', 64)


class GroupJoin(BaseModel):
    code: str
    name: str

    @field_validator('code')
    @classmethod
    def validate_code(cls, v):
        return _required_text(v, 'Group code', 16).upper()

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _required_text(v, 'Member name', 64)


class CategoryCreate(BaseModel):
    name: str
    color: str
    words: List[str] = Field(min_length=WORDS_PER_CATEGORY, max_length=WORDS_PER_CATEGORY)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _required_text(v, 'Category name', 100)

    @field_validator('color')
    @classmethod
    def validate_color(cls, v):
        color = (v or '').strip().lower()
        if color not in CATEGORY_COLORS:
            raise ValueError(f"Color must be one of: {', '.join(CATEGORY_COLORS)}")
        return color

    @field_validator('words')
    @classmethod
    def validate_words(cls, v):
        return [_required_text(word, 'Word', 100) for word in v]


class PuzzleCreate(BaseModel):
    difficulty: str
    categories: List[CategoryCreate] = Field(min_length=CATEGORIES_PER_PUZZLE, max_length=CATEGORIES_PER_PUZZLE)

    @field_validator('difficulty')
    @classmethod
    def validate_difficulty(cls, v):
        return _required_text(v, 'Difficulty', 32).lower()

    @field_validator('categories')
    @classmethod
    def validate_partition(cls, v):
        names = [c.name.lower() for c in v]
        if len(names) != len(set(names)):
            raise ValueError("Category names must be unique within a puzzle")
        words = [w.lower() for c in v for w in c.words]
        if len(words) != len(set(words)):
            raise ValueError("Words must be unique across all categories")
        return v


class SolveRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    incorrect_guesses: int = Field(alias='incorrectGuesses', ge=0, strict=True)


def parse_payload(schema, data, message=None):
    """Validate a JSON body against ``schema`` or raise ``ValidationError``."""
    if not isinstance(data, dict):
        raise ValidationError(message or 'Request body must be a JSON object')
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        fields = {}
        for err in exc.errors():
            loc = '.'.join(str(part) for part in err['loc']) or 'body'
            fields.setdefault(loc, err['msg'])
        raise ValidationError(message, fields=fields) from None
