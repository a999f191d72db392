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

"""Test django-x509ext system checks."""

from django.apps import apps
from django.conf import settings as django_settings
from django.core import checks

import pytest
from pytest_django.fixtures import SettingsWrapper

from django_x509ext.checks import check_settings, check_text_conversion


def test_valid_settings() -> None:
    """Test checks with the test settings."""
    assert check_settings(None) == []
    assert check_text_conversion(None) == []


def test_invalid_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test check for invalid settings."""
    # Set the value on the settings object directly, so that model_settings is not reloaded.
    monkeypatch.setattr(django_settings, "X509EXT_TEXT_ERRORS", "wrong", raising=False)
    errors = check_settings([apps.get_app_config("django_x509ext")])
    assert [error.id for error in errors] == ["django-x509ext.E001"]
    assert isinstance(errors[0], checks.Error)
    assert "X509EXT_TEXT_ERRORS" in errors[0].msg


def test_strict_text_errors(settings: SettingsWrapper) -> None:
    """Test the warning for the strict error handler."""
    settings.X509EXT_TEXT_ERRORS = "strict"
    errors = check_text_conversion([apps.get_app_config("django_x509ext")])
    assert errors == [
        checks.Warning(
            'X509EXT_TEXT_ERRORS is set to "strict": Extensions that contain invalid UTF-8 cannot be '
            "formatted.",
            id="django-x509ext.W001",
        )
    ]


def test_lax_der(settings: SettingsWrapper) -> None:
    """Test the warning for disabled strict DER parsing."""
    settings.X509EXT_STRICT_DER = False
    errors = check_text_conversion(None)
    assert [error.id for error in errors] == ["django-x509ext.W002"]


def test_other_app_selected(settings: SettingsWrapper) -> None:
    """Test that checks do not run if only other apps are checked."""
    settings.X509EXT_STRICT_DER = False
    assert check_text_conversion([]) == []
    assert check_settings([]) == []


def test_registered_checks(settings: SettingsWrapper) -> None:
    """Test that checks are registered when the app is loaded."""
    settings.X509EXT_TEXT_ERRORS = "strict"
    settings.X509EXT_STRICT_DER = False

    ids = {message.id for message in checks.run_checks(include_deployment_checks=True)}
    assert {"django-x509ext.W001", "django-x509ext.W002"} <= ids

    ids = {message.id for message in checks.run_checks()}
    assert "django-x509ext.W001" not in ids
