##
# .cloudsql - connect to Cloud SQL instances over Unix domain sockets
# copyright 2017, Google Inc.
# Use of this source code is governed by the Apache 2.0 license.
##
"""
Cloud SQL exposes each instance as a PostgreSQL Unix domain socket beneath a
common directory, ``/cloudsql`` by default::

	/cloudsql/project:region:instance/.s.PGSQL.5432
"""
import os
import socket

from .exceptions import ConnectionError, ConnectTimeoutError

__all__ = ['socket_path', 'SocketFactory', 'connect']

default_directory = '/cloudsql'
default_port = 5432

def socket_path(instance, directory = default_directory, port = default_port):
	'The file system path of the PostgreSQL socket for `instance`'
	return os.path.join(directory, instance, '.s.PGSQL.' + str(port))

class SocketFactory(object):
	"""
	Object used to create a socket and connect it.

	This is, more or less, a specialized partial() for socket creation.
	"""

	timeout_exception = socket.timeout
	fatal_exception = socket.error

	def timed_out(self, err) -> bool:
		return err.__class__ is self.timeout_exception

	def __call__(self, timeout = None):
		s = socket.socket(*self.socket_create)
		try:
			s.settimeout(float(timeout) if timeout is not None else None)
			s.connect(self.socket_connect)
			s.settimeout(None)
		except Exception:
			s.close()
			raise
		return s

	def __init__(self, socket_create, socket_connect):
		self.socket_create = socket_create
		self.socket_connect = socket_connect

	def __str__(self):
		return 'socket' + repr(self.socket_connect)

	@classmethod
	def unix(typ, path):
		'Create a factory for a stream socket connected to the file at `path`'
		return typ((socket.AF_UNIX, socket.SOCK_STREAM), path)

def connect(instance, timeout = None, directory = default_directory, port = default_port):
	"""
	Connect a socket to the Cloud SQL `instance`.

	`timeout` bounds the connection attempt; the returned socket is blocking.
	Failures raise `gaepostgres.exceptions.ConnectionError`, or its
	`ConnectTimeoutError` subclass when the timeout expired.
	"""
	path = socket_path(instance, directory, port)
	sf = SocketFactory.unix(path)
	try:
		return sf(timeout)
	except sf.fatal_exception as err:
		if sf.timed_out(err):
			raise ConnectTimeoutError(
				"timed out connecting to Cloud SQL instance %r" %(instance,),
				instance = instance, path = path,
			) from err
		raise ConnectionError(
			"could not connect to Cloud SQL instance %r at %r: %s" %(
				instance, path, getattr(err, 'strerror', None) or err,
			),
			instance = instance, path = path,
		) from err
