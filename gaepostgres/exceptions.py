##
# .exceptions - errors raised by gaepostgres
# copyright 2017, Google Inc.
# Use of this source code is governed by the Apache 2.0 license.
##
"""
Exceptions raised while parsing connection strings and routing connections.

Every parse failure is a `ParseError`; the `kind` attribute names the violated
rule::

	>>> from gaepostgres import conninfo
	>>> conninfo.parse('onlykey')
	Traceback (most recent call last):
	...
	gaepostgres.exceptions.MissingEqualsError: missing "=" after 'onlykey' in connection info string
"""

class Exception(Exception):
	'Base gaepostgres exception class'
	pass

class ParseError(Exception, ValueError):
	"""
	The connection string does not follow the key=value grammar.

	`position` is the scanner's index when the problem was detected, and `key`
	is the partially read key where one is relevant.
	"""
	kind = None

	def __init__(self, message, key = None, position = None):
		super().__init__(message)
		self.message = message
		self.key = key
		self.position = position

	def __str__(self):
		return self.message

	def __repr__(self):
		return '%s.%s(%r, key = %r, position = %r)' %(
			type(self).__module__,
			type(self).__name__,
			self.message, self.key, self.position,
		)

class MissingEqualsError(ParseError):
	kind = 'MissingEquals'

	def __init__(self, key, position = None):
		super().__init__(
			'missing "=" after %r in connection info string' %(key,),
			key = key, position = position,
		)

class UnterminatedQuoteError(ParseError):
	kind = 'UnterminatedQuote'

	def __init__(self, key = None, position = None):
		super().__init__(
			'unterminated quoted string literal in connection string',
			key = key, position = position,
		)

class TrailingBackslashError(ParseError):
	kind = 'TrailingBackslash'

	def __init__(self, key = None, position = None):
		super().__init__(
			'missing character after backslash',
			key = key, position = position,
		)

class RoutingError(Exception, ValueError):
	'A routing option was given, but it does not identify an instance.'

class ConnectionError(Exception):
	"""
	The socket to a Cloud SQL instance could not be connected.

	`instance` names the instance and `path` the socket file. The underlying
	socket error is chained as `__cause__`.
	"""
	def __init__(self, message, instance = None, path = None):
		super().__init__(message)
		self.instance = instance
		self.path = path

class ConnectTimeoutError(ConnectionError):
	'The connection attempt did not complete within the requested timeout.'
