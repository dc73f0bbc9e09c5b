"""The logging configuration for the application."""


def get_logging_configuration( wsgi_level, gunicorn_level, gunicorn=False ):
    """"Return a dictionary to build the logging configuration.

    :param str wsgi_level: Level for the root and wsgi loggers.
    :param str gunicorn_level: Level for the gunicorn.error logger.
    :param bool gunicorn: When True also log to errors.log through the gunicorn.error logger.
    :return: A dictionary for logging.config.dictConfig().
    """

    logging_configuration = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'default': { 'format': '%(asctime)s %(levelname)-5s [%(filename)s:%(funcName)s:%(lineno)d] %(message)s' }
        },
        'handlers': {
            'wsgi': { 'class': 'logging.StreamHandler', 'stream': 'ext://sys.stdout', 'formatter': 'default' }
        },
        'loggers': {
            'wsgi': { 'level': wsgi_level, 'propagate': False, 'handlers': [ 'wsgi' ] }
        },
        'root': {
            'level': wsgi_level,
            'handlers': [ 'wsgi' ]
        }
    }
    if gunicorn:
        logging_configuration[ 'handlers' ][ 'gunicorn.error' ] = {
            'class': 'logging.FileHandler', 'filename': 'errors.log', 'formatter': 'default'
        }
        logging_configuration[ 'loggers' ][ 'gunicorn.error' ] = {
            'level': gunicorn_level, 'propagate': False, 'handlers': [ 'gunicorn.error' ]
        }
        logging_configuration[ 'root' ][ 'handlers' ].append( 'gunicorn.error' )

    return logging_configuration
