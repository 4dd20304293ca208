##
# gaepostgres - PostgreSQL connection strings for App Engine
# copyright 2017, Google Inc.
# Use of this source code is governed by the Apache 2.0 license.
##
"""
gaepostgres parses and constructs libpq connection strings and routes
connections naming Cloud SQL instances through a Unix socket dialer.

`gaepostgres.conninfo` is the connection string parser; `gaepostgres.driver`
holds the routing layer that is handed the SQL client's open functions.
"""
__all__ = [
	'__author__',
	'__project__',
	'__project_id__',
	'__docformat__',
	'__version__',
	'version',
	'version_info',
	'open',
]

from . import project as _project

__author__ = _project.author
__project__ = _project.name
__project_id__ = _project.identity

#: The gaepostgres version tuple.
version_info = _project.version_info

#: The gaepostgres version string.
version = __version__ = _project.version

# Avoid importing these until requested.
_pg_driver = None
def open(name, driver = 'gae-postgres'):
	"""
	Open a connection to the database referenced by the connection string
	`name` using the driver registered as `driver`::

		>>> import gaepostgres
		>>> from gaepostgres import driver
		>>> driver.register('gae-postgres', driver.Driver(pq_open, pq_dial_open))
		>>> db = gaepostgres.open('cloudsql=project:region:instance user=postgres')
	"""
	global _pg_driver
	if _pg_driver is None:
		from . import driver as _pg_driver

	try:
		d = _pg_driver.drivers[driver]
	except KeyError:
		raise ValueError("no driver registered as %r" %(driver,)) from None
	return d.open(name)

__docformat__ = 'reStructuredText'
