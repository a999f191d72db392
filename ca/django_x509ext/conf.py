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

"""Application configuration for django-x509ext.

Settings are read from the Django settings module and validated with Pydantic. Use ``model_settings`` to
access them::

    >>> from django_x509ext.conf import model_settings
    >>> model_settings.X509EXT_TEXT_ERRORS
    'backslashreplace'
"""

from collections.abc import Iterable
from typing import Annotated, Any, Literal

from annotated_types import MinLen
from pydantic import AfterValidator, BaseModel, ConfigDict, field_validator

from cryptography import x509

from django.conf import settings as _settings
from django.core.exceptions import ImproperlyConfigured

from django_x509ext import constants
from django_x509ext.pydantic.validators import oid_validator, short_name_validator

DottedString = Annotated[str, AfterValidator(oid_validator)]
ShortName = Annotated[str, MinLen(1), AfterValidator(short_name_validator)]

#: Error handlers that can be used when turning formatted extension values into text.
TextErrors = Literal["strict", "replace", "backslashreplace", "surrogateescape"]


class SettingsModel(BaseModel):
    """Pydantic model defining available settings."""

    model_config = ConfigDict(from_attributes=True, frozen=True, arbitrary_types_allowed=True)

    X509EXT_EXTRA_OIDS: dict[DottedString, ShortName] = {}
    X509EXT_STRICT_DER: bool = True
    X509EXT_TEXT_ERRORS: TextErrors = "backslashreplace"

    @field_validator("X509EXT_EXTRA_OIDS")
    @classmethod
    def validate_extra_oids(cls, value: dict[str, str]) -> dict[str, str]:
        """Validate that extra object identifiers do not shadow builtin names."""
        builtin_names = set()
        for short_name, long_name in constants.OBJECT_NAMES.values():
            builtin_names |= {short_name, long_name}

        seen: set[str] = set()
        for dotted_string, short_name in value.items():
            if x509.ObjectIdentifier(dotted_string) in constants.OBJECT_NAMES:
                raise ValueError(f"{dotted_string}: Object identifier already has a name.")
            if short_name in builtin_names:
                raise ValueError(f"{short_name}: Name is already used by a builtin object identifier.")
            if short_name in seen:
                raise ValueError(f"{short_name}: Name is used for multiple object identifiers.")
            seen.add(short_name)
        return value


class SettingsProxy:
    """Proxy class to access settings from the model.

    This class exists to enable reloading of settings in test cases.
    """

    __settings: SettingsModel

    def __init__(self) -> None:
        self.reload()

    def __dir__(self, object: Any = None) -> Iterable[str]:  # pylint: disable=redefined-builtin
        # Used by ipython for tab completion, see:
        #   http://ipython.org/ipython-doc/dev/config/integrating.html
        return list(super().__dir__()) + list(SettingsModel.model_fields)

    def reload(self) -> None:
        """Reload settings model from django settings."""
        try:
            self.__settings = SettingsModel.model_validate(_settings)
        except ValueError as ex:
            raise ImproperlyConfigured(str(ex)) from ex

    def __getattr__(self, item: str) -> Any:
        return getattr(self.__settings, item)


model_settings = SettingsProxy()
