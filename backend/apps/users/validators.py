from typing import Any, Callable, List, Mapping, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.utils.translation import gettext as _

ACCOUNT_TYPES = ("client", "pro")
MIN_PASSWORD_LENGTH = 6
MIN_NAME_LENGTH = 2


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def is_valid_email(value: str) -> bool:
    try:
        validate_email(value)
    except DjangoValidationError:
        return False
    return True


class RegistrationValidator:
    """
    Field-level checks for the registration form.

    Every rule runs regardless of earlier failures so the caller can report
    all problems at once. ``email_exists`` is consulted only for a well-formed
    email address.
    """

    def __init__(self, email_exists: Callable[[str], bool]):
        self.email_exists = email_exists

    def validate(self, data: Mapping[str, Any]) -> List[str]:
        email = _clean(data.get("email"))
        password = data.get("password") or ""
        confirm_password = data.get("confirm_password") or ""
        first_name = _clean(data.get("first_name"))
        last_name = _clean(data.get("last_name"))
        account_type = data.get("account_type")
        company_name = _clean(data.get("company_name"))

        errors: List[str] = []
        email_ok = self._check_email(email, errors)
        self._check_password(password, confirm_password, errors)
        self._check_name(
            first_name,
            errors,
            _("First name is required."),
            _("First name must be at least %(min)d characters long."),
        )
        self._check_name(
            last_name,
            errors,
            _("Last name is required."),
            _("Last name must be at least %(min)d characters long."),
        )
        if account_type not in ACCOUNT_TYPES:
            errors.append(_("Selected account type is not valid."))
        if account_type == "pro" and not company_name:
            errors.append(_("Company name is required for a professional account."))
        if email_ok and self.email_exists(email):
            errors.append(_("This email address is already in use."))
        return errors

    @staticmethod
    def _check_email(email: str, errors: List[str]) -> bool:
        if not email:
            errors.append(_("Email is required."))
            return False
        if not is_valid_email(email):
            errors.append(_("Email address is not valid."))
            return False
        return True

    @staticmethod
    def _check_password(password: str, confirm_password: Optional[str], errors: List[str]):
        if not password:
            errors.append(_("Password is required."))
        elif len(password) < MIN_PASSWORD_LENGTH:
            errors.append(
                _("Password must be at least %(min)d characters long.")
                % {"min": MIN_PASSWORD_LENGTH}
            )
        if password != confirm_password:
            errors.append(_("Passwords do not match."))

    @staticmethod
    def _check_name(value: str, errors: List[str], missing: str, too_short: str):
        if not value:
            errors.append(missing)
        elif len(value) < MIN_NAME_LENGTH:
            errors.append(too_short % {"min": MIN_NAME_LENGTH})
