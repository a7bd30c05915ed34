"""Field-level validation for candidate submissions

Submissions arrive as mappings with camelCase keys. Rules run in a fixed
order and the first violation raises a ValidationException whose kind names
the offending field, so callers always get the same message for the same
input.
"""

import re
import unicodedata
from datetime import date
from typing import Any, List, Mapping

from pydantic import ValidationError

from backend.app.core.exceptions import ValidationErrorKind, ValidationException
from backend.app.core.logging import get_logger
from backend.app.schemas.candidate import CVInput

logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_PATTERN = re.compile(r"[679][0-9]{8}")
DATE_PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
NAME_EXTRA_CHARACTERS = frozenset(" '")

# Whitespace trimmed around a name: space separators, line terminators and
# the byte order mark. str.strip() would also drop \x1c-\x1f and \x85.
TRIMMED_WHITESPACE = (
    "\t\n\v\f\r \u2028\u2029\ufeff"
    "\u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u202f\u205f\u3000"
)

ADDRESS_MAX_LENGTH = 100
INSTITUTION_MAX_LENGTH = 100
TITLE_MAX_LENGTH = 250
COMPANY_MAX_LENGTH = 100
POSITION_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 200

MIN_YEAR = 1900
MAX_YEAR = 2100


def _fail(kind: ValidationErrorKind) -> None:
    logger.info(f"Candidate submission rejected: {kind.value}", extra={"error_kind": kind.name})
    raise ValidationException(kind)


def _is_name_character(char: str) -> bool:
    return char in NAME_EXTRA_CHARACTERS or unicodedata.category(char).startswith("L")


def _utf16_length(value: str) -> int:
    return len(value.encode("utf-16-le", "surrogatepass")) // 2


def is_valid_name(name: Any) -> bool:
    """
    Letters, spaces and apostrophes only, 2 to 100 characters once trimmed

    Length is counted in UTF-16 code units, so a letter outside the Basic
    Multilingual Plane counts as two.
    """
    if not isinstance(name, str):
        return False
    trimmed = name.strip(TRIMMED_WHITESPACE)
    if not NAME_MIN_LENGTH <= _utf16_length(trimmed) <= NAME_MAX_LENGTH:
        return False
    return all(_is_name_character(char) for char in trimmed)


def is_real_date(value: str) -> bool:
    """
    Check a YYYY-MM-DD string names an existing calendar day

    Args:
        value: Date string

    Returns:
        True if the string has the exact format, the year is within
        [1900, 2100] and the day exists in that month (leap years included)
    """
    match = DATE_PATTERN.fullmatch(value)
    if not match:
        return False

    year, month, day = (int(part) for part in match.groups())
    if not MIN_YEAR <= year <= MAX_YEAR:
        return False

    try:
        date(year, month, day)
    except ValueError:
        return False
    return True


def _exceeds(value: Any, max_length: int) -> bool:
    return not isinstance(value, str) or len(value) > max_length


def validate_name(name: Any) -> None:
    if not is_valid_name(name):
        _fail(ValidationErrorKind.INVALID_NAME)


def validate_email(email: Any) -> None:
    if not email or not isinstance(email, str) or not EMAIL_PATTERN.fullmatch(email):
        _fail(ValidationErrorKind.INVALID_EMAIL)


def validate_phone(phone: Any) -> None:
    if not phone:
        return
    if not isinstance(phone, str) or not PHONE_PATTERN.fullmatch(phone):
        _fail(ValidationErrorKind.INVALID_PHONE)


def validate_address(address: Any) -> None:
    if address and _exceeds(address, ADDRESS_MAX_LENGTH):
        _fail(ValidationErrorKind.INVALID_ADDRESS)


def validate_date(
    value: Any,
    required: bool = True,
    kind: ValidationErrorKind = ValidationErrorKind.INVALID_DATE
) -> None:
    """
    Validate a start or end date

    Args:
        value: Submitted date, None or empty when not supplied
        required: Whether an empty value is a violation
        kind: Failure kind raised for this field
    """
    if not value:
        if required:
            _fail(kind)
        return

    if not isinstance(value, str) or not is_real_date(value):
        _fail(kind)


def as_entry_list(value: Any) -> List[Any]:
    """Nested entries of a submission as a list; a lone object counts as one entry"""
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def as_mapping(entry: Any) -> Mapping[str, Any]:
    return entry if isinstance(entry, Mapping) else {}


def validate_education(education: Any) -> None:
    education = as_mapping(education)

    institution = education.get("institution")
    if not institution or _exceeds(institution, INSTITUTION_MAX_LENGTH):
        _fail(ValidationErrorKind.INVALID_INSTITUTION)

    title = education.get("title")
    if not title or _exceeds(title, TITLE_MAX_LENGTH):
        _fail(ValidationErrorKind.INVALID_TITLE)

    validate_date(education.get("startDate"), required=True)
    validate_date(
        education.get("endDate"),
        required=False,
        kind=ValidationErrorKind.INVALID_END_DATE
    )


def validate_experience(experience: Any) -> None:
    experience = as_mapping(experience)

    company = experience.get("company")
    if not company or _exceeds(company, COMPANY_MAX_LENGTH):
        _fail(ValidationErrorKind.INVALID_COMPANY)

    position = experience.get("position")
    if not position or _exceeds(position, POSITION_MAX_LENGTH):
        _fail(ValidationErrorKind.INVALID_POSITION)

    description = experience.get("description")
    if description and _exceeds(description, DESCRIPTION_MAX_LENGTH):
        _fail(ValidationErrorKind.INVALID_DESCRIPTION)

    validate_date(experience.get("startDate"), required=True)
    validate_date(
        experience.get("endDate"),
        required=False,
        kind=ValidationErrorKind.INVALID_END_DATE
    )


def has_cv(cv: Any) -> bool:
    """An absent or empty CV object means no resume was supplied"""
    return bool(cv)


def validate_cv(cv: Any) -> None:
    if not isinstance(cv, Mapping):
        _fail(ValidationErrorKind.INVALID_CV_DATA)
    try:
        CVInput.model_validate(cv)
    except ValidationError:
        _fail(ValidationErrorKind.INVALID_CV_DATA)


def validate_candidate_data(data: Mapping[str, Any]) -> None:
    """
    Validate a candidate submission

    Submissions carrying an id edit an existing candidate and are accepted
    as-is.

    Args:
        data: Submission with camelCase keys

    Raises:
        ValidationException: On the first rule violated
    """
    if data.get("id"):
        return

    validate_name(data.get("firstName"))
    validate_name(data.get("lastName"))
    validate_email(data.get("email"))
    validate_phone(data.get("phone"))
    validate_address(data.get("address"))

    for education in as_entry_list(data.get("educations")):
        validate_education(education)

    for experience in as_entry_list(data.get("workExperiences")):
        validate_experience(experience)

    cv = data.get("cv")
    if has_cv(cv):
        validate_cv(cv)

