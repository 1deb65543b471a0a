""" Python client for tree-structured content repositories. A
    :class:`Repository` is bound to a transport; logging in to one of its
    workspaces yields a :class:`Session`.
"""

# Utility components.

from . import errors
from . import options
from . import binary

# Submodules used by multiple other components.

from . import transport
from . import descriptors

# Primary public-facing interfaces.

from .credentials import SimpleCredentials
from .errors import RepositoryException, RepositoryAccessError
from .repository import Repository, new_repository
from .session import Session

from . import factory
get_repository = factory.get_repository

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
