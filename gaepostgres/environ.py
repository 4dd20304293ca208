##
# .environ - libpq environment variables as connection options
# copyright 2017, Google Inc.
# Use of this source code is governed by the Apache 2.0 license.
##
"""
PostgreSQL client environment variable extraction and conversion.

This module translates an environment mapping into a dictionary of connection
string options, the same keywords accepted by `gaepostgres.conninfo.parse`:

	PGHOST -> host
	PGHOSTADDR -> hostaddr
	PGPORT -> port
	PGDATABASE -> dbname
	PGUSER -> user
	PGPASSWORD -> password
	PGPASSFILE -> passfile
	PGOPTIONS -> options
	PGAPPNAME -> application_name
	PGSSLMODE -> sslmode
	PGCONNECT_TIMEOUT -> connect_timeout

[Extensions]
	PGCLOUDSQL -> cloudsql (Cloud SQL instance to route to)

These are a finite map with zero manipulation of the values.

PGREQUIRESSL gets rewritten into "sslmode = 'require'" unless PGSSLMODE is
also present.
"""
import os
import warnings

# Environment variables that require no transformation.
exact_map = {
	'PGHOST' : 'host',
	'PGHOSTADDR' : 'hostaddr',
	'PGPORT' : 'port',
	'PGDATABASE' : 'dbname',
	'PGUSER' : 'user',
	'PGPASSWORD' : 'password',
	'PGPASSFILE' : 'passfile',
	'PGOPTIONS' : 'options',
	'PGAPPNAME' : 'application_name',

	'PGSSLMODE' : 'sslmode',
	'PGSSLCERT' : 'sslcert',
	'PGSSLKEY' : 'sslkey',
	'PGSSLROOTCERT' : 'sslrootcert',
	'PGSSLCRL' : 'sslcrl',
	'PGKRBSRVNAME' : 'krbsrvname',
	'PGGSSLIB' : 'gsslib',

	'PGCONNECT_TIMEOUT' : 'connect_timeout',
	'PGCLIENTENCODING' : 'client_encoding',
	'PGTARGETSESSIONATTRS' : 'target_session_attrs',

	# Extensions
	'PGCLOUDSQL' : 'cloudsql',
}

def require_ssl(d, env):
	v = env.get('PGREQUIRESSL')
	if v is None:
		return
	if v.strip() == '1':
		d.setdefault('sslmode', 'require')
	elif v.strip() != '0':
		warnings.warn(
			"ignoring PGREQUIRESSL=%r, expecting '0' or '1'" %(v,)
		)

def standard(d, env):
	d.update([
		(v, env[k]) for k, v in exact_map.items() if k in env
	])

# PGSSLMODE supersedes the deprecated PGREQUIRESSL.
set_sequence = [
	('STANDARD', standard),
	('REQUIRE_SSL', require_ssl),
]

def convert_environ(env = os.environ, xseq = set_sequence):
	'given an environment, make a connection option dictionary'
	d = {}
	for x, op in xseq:
		op(d, env)
	return d
