import logging
import logging.config
import os


def setup_logging(level: str = "INFO", log_file: str = ""):
    """Configura o logging para a aplicação."""
    level = (level or "INFO").upper()
    handlers = {
        'default': {
            'level': level,
            'formatter': 'standard',
            'class': 'logging.StreamHandler',
        },
    }
    handler_names = ['default']

    if log_file:
        # Criar diretório de logs se necessário
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers['file'] = {
            'level': level,
            'formatter': 'standard',
            'class': 'logging.FileHandler',
            'filename': log_file,
            'encoding': 'utf-8',
        }
        handler_names.append('file')

    logging_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
            },
        },
        'handlers': handlers,
        'loggers': {
            '': {  # root logger
                'handlers': handler_names,
                'level': level,
                'propagate': False
            },
            'event_manager': {
                'handlers': handler_names,
                'level': level,
                'propagate': False
            },
        }
    }

    logging.config.dictConfig(logging_config)
