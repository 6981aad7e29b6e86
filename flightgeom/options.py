# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
This module provides the configuration layer used by the classes in :mod:`flightgeom`.

Configuration is expressed as dataclasses derived from :class:`UserOptions`.  A class that wants to be configured by
one mixes in :class:`UserOptionConfigured` together with its options dataclass, which copies the option values onto the
instance as plain attributes and remembers them so the instance can later be reset::

    >>> from dataclasses import dataclass
    >>> from flightgeom.options import UserOptions, UserOptionConfigured
    >>> @dataclass
    ... class ExampleOptions(UserOptions):
    ...     tolerance: float = 1e-6
    >>> class Example(UserOptionConfigured[ExampleOptions], ExampleOptions):
    ...     def __init__(self, options=None):
    ...         super().__init__(ExampleOptions, options=options)
    >>> example = Example()
    >>> example.tolerance = 1.0
    >>> example.reset_settings()
    >>> example.tolerance
    1e-06
"""

import copy

from abc import ABCMeta
from dataclasses import dataclass, fields
from typing import Generic, TypeVar, Any


@dataclass
class UserOptions(metaclass=ABCMeta):
    """
    This is an abstract dataclass used to hold user options for a configurable class.

    Options classes follow the naming scheme ``<ClassName>Options`` and are passed through the ``options`` keyword
    argument of the class they configure.  To copy the options onto an instance use :meth:`apply_options`.
    """

    def override_options(self) -> None:
        """
        This method is called before the options are applied and can be overridden to adjust or validate option values.
        """
        pass

    def apply_options(self, target: object) -> None:
        """
        Update the options as attributes of the target object.

        :param target: the instance that we are to update
        """

        for key, value in self.options_dict.items():
            setattr(target, key, copy.deepcopy(value))

    @property
    def options_dict(self) -> dict[str, Any]:
        """
        The options stored in this dataclass as a dictionary.

        Only the dataclass fields are included, internal attributes are ignored.
        """

        self.override_options()

        return {field.name: getattr(self, field.name) for field in fields(self)}


OptionsT = TypeVar("OptionsT", bound=UserOptions)
"""
Type variable bound to UserOptions for type safety
"""


class UserOptionConfigured(Generic[OptionsT]):
    """
    Mixin class providing :class:`UserOptions` based configuration with reset capability.

    Subclass it with the options class as the type parameter, and list the options class itself as a second base so
    that the option attributes are documented on the configured class::

        class MyUsefulClass(UserOptionConfigured[MyOptions], MyOptions):
            def __init__(self, options: MyOptions | None = None):
                super().__init__(MyOptions, options=options)

    .. Note::
        :class:`UserOptionConfigured` should come first in the inheritance order due to method resolution order.
    """

    def __init__(self, options_type: type[OptionsT], *args, options: OptionsT | None = None, **kwargs) -> None:
        """
        :param options_type: The type of the :class:`.UserOptions` to use
        :param options: An optional instance of `options_type` preconfigured.
        """

        super().__init__(*args, **kwargs)

        if options is None:
            options = options_type()

        options.apply_options(self)

        self._original_options: OptionsT = copy.deepcopy(options)
        """
        The original configuration for this class
        """

    def reset_settings(self) -> None:
        """
        Resets the instance to the options it was originally initialized with.
        """

        self._original_options.apply_options(self)

    @property
    def original_options(self) -> OptionsT:
        """
        The original configuration options used during initialization.
        """
        return self._original_options

    @original_options.setter
    def original_options(self, value: OptionsT) -> None:
        self._original_options = copy.deepcopy(value)
