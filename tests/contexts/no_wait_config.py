from insta.config import Config


def no_wait_config(attempts: int = 2) -> Config:
    config = Config()
    config.service_up_check_attempts = attempts
    config.service_up_check_delay = 0
    return config
