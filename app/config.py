from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    api_root: str = "https://dora.coz.io/api/v1"
    network: str = "mainnet"
    default_chain: str = "neo2"
    successor_chain: str = "neo3"
    api_base_url_override: str = ""
    http_timeout: float | None = None

    def base_url(self, chain: str | None = None) -> str:
        chain = chain or self.default_chain
        if self.api_base_url_override:
            return f"{self.api_base_url_override.rstrip('/')}/{chain}"
        return f"{self.api_root.rstrip('/')}/{chain}/{self.network}"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
