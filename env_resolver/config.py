from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # Entity catalog
    CATALOG_BASE_URL: str = "http://localhost:7007"
    CATALOG_TIMEOUT_SECONDS: float = 10.0

    # Credential broker (STS)
    # Available fields: {prefix}, {provider_name}, {account_id}, {region}
    ROLE_NAME_TEMPLATE: str = "{prefix}-{provider_name}-operations-role"
    SESSION_DURATION_SECONDS: int = 3600

    # boto3 client behaviour
    # max attempts of 1 keeps retries out of the resolver; raise it to let botocore retry
    AWS_CONNECT_TIMEOUT_SECONDS: int = 5
    AWS_READ_TIMEOUT_SECONDS: int = 10
    AWS_MAX_ATTEMPTS: int = 1

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5010
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        env_prefix = "ENV_RESOLVER_"
        extra = "ignore"

settings = Settings()
