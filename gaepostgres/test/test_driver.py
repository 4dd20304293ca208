##
# .test.test_driver
# copyright 2017, Google Inc.
# Use of this source code is governed by the Apache 2.0 license.
##
import functools
import socket
import unittest
import warnings

import gaepostgres
import gaepostgres.cloudsql as pg_cloudsql
import gaepostgres.driver as pg_driver
import gaepostgres.conninfo as pg_conninfo
import gaepostgres.exceptions as pg_exc

# options, instance, remaining options
route_samples = [
	({}, None, {}),
	({'host' : 'localhost'}, None, {'host' : 'localhost'}),
	({'host' : '/var/run/postgresql'}, None, {'host' : '/var/run/postgresql'}),
	({'host' : '/cloudsqlx/p:r:i'}, None, {'host' : '/cloudsqlx/p:r:i'}),
	(
		{'cloudsql' : 'p:r:i', 'user' : 'postgres'},
		'p:r:i', {'user' : 'postgres'},
	),
	(
		{'host' : '/cloudsql/p:r:i', 'user' : 'postgres'},
		'p:r:i', {'user' : 'postgres'},
	),
	(
		{'cloudsql' : 'p:r:i', 'host' : 'localhost'},
		'p:r:i', {'host' : 'localhost'},
	),
]

class Recorder(object):
	'Stands in for the SQL layer, recording the calls it receives'
	def __init__(self):
		self.calls = []

	def open(self, name):
		self.calls.append(('open', name))
		return 'connection'

	def dial_open(self, dialer, name):
		self.calls.append(('dial_open', dialer, name))
		return 'dialed connection'

class test_route(unittest.TestCase):
	def test_route(self):
		for options, instance, remaining in route_samples:
			options = dict(options)
			self.assertEqual(pg_driver.route(options), instance)
			self.assertEqual(options, remaining)

	def test_cloudsql_precedence(self):
		options = {'cloudsql' : 'a:b:c', 'host' : '/cloudsql/x:y:z'}
		with warnings.catch_warnings(record = True) as w:
			warnings.simplefilter('always')
			instance = pg_driver.route(options)
		self.assertEqual(instance, 'a:b:c')
		self.assertEqual(options, {'host' : '/cloudsql/x:y:z'})
		self.assertEqual(len(w), 1)
		self.assertIn('x:y:z', str(w[0].message))

	def test_empty_instance(self):
		self.assertRaises(pg_exc.RoutingError, pg_driver.route, {'cloudsql' : ''})
		self.assertRaises(
			pg_exc.RoutingError, pg_driver.route, {'host' : '/cloudsql/'}
		)

class test_resolve(unittest.TestCase):
	def test_unrouted(self):
		name = "host=localhost user=me password='a b'"
		self.assertEqual(pg_driver.resolve(name), (None, name))

	def test_cloudsql_option(self):
		instance, conninfo = pg_driver.resolve(
			"cloudsql=p:r:i user=postgres password='p w'"
		)
		self.assertEqual(instance, 'p:r:i')
		self.assertEqual(
			conninfo, "user=postgres password=p\\ w  sslmode=disable"
		)
		self.assertEqual(pg_conninfo.parse(conninfo), {
			'user' : 'postgres', 'password' : 'p w', 'sslmode' : 'disable',
		})

	def test_cloudsql_host(self):
		instance, conninfo = pg_driver.resolve(
			'host=/cloudsql/p:r:i dbname=db'
		)
		self.assertEqual(instance, 'p:r:i')
		self.assertEqual(pg_conninfo.parse(conninfo), {
			'dbname' : 'db', 'sslmode' : 'disable',
		})

	def test_defaults(self):
		instance, conninfo = pg_driver.resolve(
			'user=me', {'cloudsql' : 'p:r:i', 'user' : 'postgres'}
		)
		self.assertEqual(instance, 'p:r:i')
		self.assertEqual(pg_conninfo.parse(conninfo), {
			'user' : 'me', 'sslmode' : 'disable',
		})

	def test_parse_error(self):
		self.assertRaises(
			pg_exc.MissingEqualsError, pg_driver.resolve, 'cloudsql'
		)

class test_dialer(unittest.TestCase):
	def test_dial(self):
		calls = []
		def connector(instance, timeout = None):
			calls.append((instance, timeout))
			return 'socket'
		d = pg_driver.Dialer('p:r:i', connector)
		self.assertEqual(d.dial('tcp', 'localhost:5432'), 'socket')
		self.assertEqual(d.dial_timeout('unix', '/tmp/.s.PGSQL.5432', 3), 'socket')
		self.assertEqual(calls, [('p:r:i', None), ('p:r:i', 3)])

	@unittest.skipUnless(hasattr(socket, 'AF_UNIX'), "requires unix domain sockets")
	def test_dial_timeout_error(self):
		d = pg_driver.Dialer('p:r:i', functools.partial(
			pg_cloudsql.connect, directory = '/nonexistent-gaepostgres'
		))
		self.assertRaises(
			pg_exc.ConnectionError, d.dial_timeout, 'tcp', 'ignored', 1
		)

	def test_repr(self):
		self.assertEqual(
			repr(pg_driver.Dialer('p:r:i')),
			"gaepostgres.driver.Dialer('p:r:i')"
		)

class test_driver(unittest.TestCase):
	def test_open(self):
		r = Recorder()
		d = pg_driver.Driver(r.open, r.dial_open)
		self.assertEqual(d.open('host=localhost'), 'connection')
		self.assertEqual(r.calls, [('open', 'host=localhost')])

	def test_dial_open(self):
		r = Recorder()
		connector = lambda instance, timeout = None: (instance, timeout)
		d = pg_driver.Driver(r.open, r.dial_open, connector = connector)
		self.assertEqual(
			d.open('cloudsql=p:r:i user=postgres'), 'dialed connection'
		)
		(method, dialer, conninfo), = r.calls
		self.assertEqual(method, 'dial_open')
		self.assertEqual(dialer.instance, 'p:r:i')
		self.assertEqual(dialer.dial('tcp', 'ignored'), ('p:r:i', None))
		self.assertEqual(conninfo, 'user=postgres  sslmode=disable')

	def test_environ(self):
		r = Recorder()
		d = pg_driver.Driver(r.open, r.dial_open, environ = {
			'PGHOST' : '/cloudsql/p:r:i',
			'PGUSER' : 'postgres',
		})
		d.open('dbname=db')
		(method, dialer, conninfo), = r.calls
		self.assertEqual(dialer.instance, 'p:r:i')
		self.assertEqual(pg_conninfo.parse(conninfo), {
			'user' : 'postgres', 'dbname' : 'db', 'sslmode' : 'disable',
		})

	def test_environ_overridden(self):
		r = Recorder()
		d = pg_driver.Driver(r.open, r.dial_open, environ = {
			'PGHOST' : '/cloudsql/p:r:i',
		})
		d.open('host=localhost')
		self.assertEqual(r.calls, [('open', 'host=localhost')])

class test_register(unittest.TestCase):
	name = 'test-gae-postgres'

	def tearDown(self):
		pg_driver.drivers.pop(self.name, None)

	def test_register(self):
		r = Recorder()
		pg_driver.register(self.name, pg_driver.Driver(r.open, r.dial_open))
		self.assertEqual(
			gaepostgres.open('user=me', driver = self.name), 'connection'
		)
		self.assertEqual(r.calls, [('open', 'user=me')])

	def test_register_twice(self):
		r = Recorder()
		pg_driver.register(self.name, pg_driver.Driver(r.open, r.dial_open))
		self.assertRaises(
			ValueError, pg_driver.register, self.name,
			pg_driver.Driver(r.open, r.dial_open),
		)

	def test_unregistered(self):
		self.assertRaises(ValueError, gaepostgres.open, 'user=me', self.name)

if __name__ == '__main__':
	from types import ModuleType
	this = ModuleType("this")
	this.__dict__.update(globals())
	unittest.main(this)
