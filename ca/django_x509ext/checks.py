# This file is part of django-x509ext.
#
# django-x509ext is free software: you can redistribute it and/or modify it under the terms of the GNU
# General Public License as published by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# django-x509ext is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even
# the implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public
# License for more details.
#
# You should have received a copy of the GNU General Public License along with django-x509ext. If not, see
# <http://www.gnu.org/licenses/>.

"""System checks for django-x509ext.

.. seealso:: https://docs.djangoproject.com/en/dev/topics/checks/
"""

from typing import Any, Optional

from pydantic import ValidationError

from django.apps import AppConfig
from django.conf import settings
from django.core import checks

from django_x509ext.conf import SettingsModel


def _is_selected(app_configs: Optional[list[AppConfig]]) -> bool:
    # only run checks if manage.py check is run with no app labels (== all) or the django_x509ext app label
    return app_configs is None or any(config.name == "django_x509ext" for config in app_configs)


# TYPE NOTE: django-stubs does not type-hint the decorator
@checks.register()  # type: ignore[type-var]
def check_settings(app_configs: Optional[list[AppConfig]], **kwargs: Any) -> list[checks.CheckMessage]:
    """Check that the ``X509EXT_*`` settings are valid."""
    if not _is_selected(app_configs):
        return []

    try:
        SettingsModel.model_validate(settings)
    except ValidationError as ex:
        return [
            checks.Error(
                f"Invalid django-x509ext settings: {ex}",
                hint="Check the X509EXT_* settings.",
                id="django-x509ext.E001",
            )
        ]
    return []


# TYPE NOTE: django-stubs does not type-hint the decorator
@checks.register(deploy=True)  # type: ignore[type-var]
def check_text_conversion(
    app_configs: Optional[list[AppConfig]], **kwargs: Any
) -> list[checks.CheckMessage]:
    """Warn about settings that make formatting of extensions from untrusted certificates fail or lax."""
    if not _is_selected(app_configs):
        return []

    errors: list[checks.CheckMessage] = []
    if getattr(settings, "X509EXT_TEXT_ERRORS", None) == "strict":
        errors.append(
            checks.Warning(
                'X509EXT_TEXT_ERRORS is set to "strict": Extensions that contain invalid UTF-8 cannot be '
                "formatted.",
                id="django-x509ext.W001",
            )
        )
    if getattr(settings, "X509EXT_STRICT_DER", True) is False:
        errors.append(
            checks.Warning(
                "X509EXT_STRICT_DER is disabled: Trailing data in extension values is ignored.",
                id="django-x509ext.W002",
            )
        )
    return errors
