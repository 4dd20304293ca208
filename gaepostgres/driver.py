##
# .driver - route connection strings to Cloud SQL instances
# copyright 2017, Google Inc.
# Use of this source code is governed by the Apache 2.0 license.
##
"""
Open PostgreSQL connections, routing Cloud SQL instances through a dialer.

A connection string naming a Cloud SQL instance, either with the ``cloudsql``
option or with a ``host`` beneath ``/cloudsql/``::

	cloudsql=project:region:instance user=postgres password=pw
	host=/cloudsql/project:region:instance user=postgres password=pw

is rewritten without the routing option, suffixed with ``sslmode=disable``, and
handed to the SQL layer's ``dial_open`` together with a `Dialer` for the
instance. Any other connection string is passed to the SQL layer's ``open``
unchanged.

The SQL layer itself is not part of this package; a `Driver` is given the two
callables to delegate to.
"""
import warnings

from . import conninfo as pg_conninfo
from . import environ as pg_environ
from . import cloudsql as pg_cloudsql
from .exceptions import RoutingError

__all__ = [
	'route',
	'resolve',
	'Dialer',
	'Driver',
	'register',
	'drivers',
]

#: The conventional registration name.
default_name = 'gae-postgres'

cloudsql_option = 'cloudsql'
cloudsql_host_prefix = '/cloudsql/'
cloudsql_suffix = ' sslmode=disable'

def route(options):
	"""
	Remove the routing option from `options` and return the Cloud SQL instance
	it names, or `None` if the options do not name one.

	``cloudsql`` takes precedence over ``host``.
	"""
	if cloudsql_option in options:
		instance = options.pop(cloudsql_option)
		host = options.get('host')
		if host is not None and host.startswith(cloudsql_host_prefix):
			warnings.warn(
				"host %r is ignored, connecting to Cloud SQL instance %r" %(
					host, instance
				)
			)
	else:
		host = options.get('host')
		if host is None or not host.startswith(cloudsql_host_prefix):
			return None
		del options['host']
		instance = host[len(cloudsql_host_prefix):]

	if not instance:
		raise RoutingError("empty Cloud SQL instance name")
	return instance

def resolve(name, defaults = None):
	"""
	resolve(name, defaults = None) -> (instance, conninfo)

	Parse the connection string `name`, over `defaults` if given, and decide
	where it connects. `instance` is `None` and `conninfo` is `name` for
	connections that are not routed.
	"""
	options = pg_conninfo.parse(name, dict(defaults or ()))
	instance = route(options)
	if instance is None:
		return None, name
	return instance, pg_conninfo.marshal(options) + cloudsql_suffix

class Dialer(object):
	"""
	Dial a fixed Cloud SQL instance.

	The network and address requested by the SQL layer are ignored; every dial
	connects to `instance` using `connector`. Connection failures raised by the
	connector, such as `gaepostgres.exceptions.ConnectTimeoutError`, propagate.
	"""

	def __init__(self, instance, connector = pg_cloudsql.connect):
		self.instance = instance
		self.connector = connector

	def dial(self, network, address):
		return self.connector(self.instance)

	def dial_timeout(self, network, address, timeout):
		return self.connector(self.instance, timeout = timeout)

	def __repr__(self):
		return '%s.%s(%r)' %(
			type(self).__module__,
			type(self).__name__,
			self.instance,
		)

class Driver(object):
	"""
	Open connections using the SQL layer's `opener` and `dial_opener`.

	`opener(conninfo)` handles ordinary connection strings and
	`dial_opener(dialer, conninfo)` routed ones. When `environ` is given, the
	options it converts to act as defaults while deciding on a route.
	"""

	def __init__(self,
		opener,
		dial_opener,
		connector = pg_cloudsql.connect,
		environ = None,
	):
		self.opener = opener
		self.dial_opener = dial_opener
		self.connector = connector
		self.environ = environ

	def open(self, name):
		defaults = None
		if self.environ is not None:
			defaults = pg_environ.convert_environ(self.environ)
		instance, conninfo = resolve(name, defaults)
		if instance is None:
			return self.opener(name)
		return self.dial_opener(Dialer(instance, self.connector), conninfo)

drivers = {}

def register(name, driver):
	'Make `driver` available to `gaepostgres.open` as `name`'
	if name in drivers:
		raise ValueError("driver %r is already registered" %(name,))
	drivers[name] = driver
