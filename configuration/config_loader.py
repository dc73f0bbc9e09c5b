"""Load the application configuration from conf.yml and tagged environment variables."""
import os

import yaml


class ConfigLoader( dict ):
    """A dictionary that is filled from a YAML section and then overridden by environment variables.

    The YAML file has one top level section per environment, e.g. DEFAULT, DEV, TEST and PRODUCTION. Every section
    inherits the keys of DEFAULT. Environment variables tagged with the prefix DONATION_<ENV>_ override what was read
    from the file, e.g. DONATION_PRODUCTION_JWT_SECRET_KEY sets JWT_SECRET_KEY for PRODUCTION.
    """

    ENV_PREFIX = 'DONATION'

    def update_from_yaml_file( self, file_path, app_config_env ):
        """Update the configuration with the DEFAULT section and then the section for the given environment.

        :param str file_path: Path to the YAML file.
        :param str app_config_env: The configuration name, e.g. TEST.
        :return:
        """

        with open( file_path, 'r' ) as file_pointer:
            sections = yaml.safe_load( file_pointer ) or {}

        self.update( sections.get( 'DEFAULT', {} ) or {} )
        if app_config_env != 'DEFAULT':
            if app_config_env not in sections:
                raise KeyError( 'Configuration section {} not found in {}.'.format( app_config_env, file_path ) )
            self.update( sections[ app_config_env ] or {} )

    def update_from_env_variables( self, app_config_env ):
        """Override configuration keys from environment variables named DONATION_<ENV>_<KEY>.

        Values are parsed as YAML scalars so that integers and booleans keep their types.

        :param str app_config_env: The configuration name, e.g. PRODUCTION.
        :return:
        """

        prefix = '{}_{}_'.format( self.ENV_PREFIX, app_config_env )
        for name, value in os.environ.items():
            if name.startswith( prefix ) and len( name ) > len( prefix ):
                self[ name[ len( prefix ): ] ] = yaml.safe_load( value ) if value != '' else ''
