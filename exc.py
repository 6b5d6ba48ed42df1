class WebhookError(Exception):
    pass


class ConfigurationError(WebhookError):
    pass
