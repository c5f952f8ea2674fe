SWEEP_INTERVAL_SECONDS = 5 * 60


class Config:
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_FILE = 'logs.txt'
    LOG_LEVEL = 'INFO'
    LOG_CONSOLE = True

    SWEEP_INTERVAL_SECONDS = SWEEP_INTERVAL_SECONDS

    SWAGGER = {
        'title': 'Task Manager API',
        'uiversion': 3,
        'description': 'REST API for managing tasks',
        'version': '1.0',
    }


# flasgger serves the UI under /swagger/ and the generated OpenAPI document beside it
SWAGGER_CONFIG = {
    'headers': [],
    'specs': [
        {
            'endpoint': 'apispec',
            'route': '/swagger/apispec.json',
            'rule_filter': lambda rule: True,
            'model_filter': lambda tag: True,
        }
    ],
    'static_url_path': '/flasgger_static',
    'swagger_ui': True,
    'specs_route': '/swagger/',
}
