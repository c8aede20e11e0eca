"""Data-access core of the PersonalOS organizer.

Subpackages:

- :mod:`personalos.domain` holds the persisted entity types.
- :mod:`personalos.repositories` holds the repository contract, the store
  serializer and the SQLite implementations.
- :mod:`personalos.application.services` holds the bootstrapper and the backup
  service built on top of the repositories.
"""
