# app/config.py
from pydantic_settings import BaseSettings
from pydantic import field_validator

class Settings(BaseSettings):
    """환경변수 설정"""

    # API 기본 설정
    app_name: str = "Nutrition Challenge API"
    debug: bool = False
    port: int = 3000

    # Database (예: mysql+pymysql://root:pw@localhost:3306/nutrition_challenge)
    database_url: str

    # JWT
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 12  # 12시간

    # 타이머 작업 (자동 실패 / 최종 판정)
    timezone: str = "Asia/Seoul"
    scheduler_enabled: bool = True
    auto_fail_interval_seconds: int = 300
    verdict_interval_seconds: int = 60

    # 정적 파일 / 로그
    images_dir: str = "public/images"
    log_dir: str = "logs"
    cors_origins: list[str] = ["*"]

    @field_validator('secret_key')
    def validate_secret_key(cls, v):
        if len(v) < 32:
            raise ValueError('SECRET_KEY는 최소 32자 이상이어야 합니다')
        return v

    @field_validator('auto_fail_interval_seconds', 'verdict_interval_seconds')
    def validate_interval(cls, v):
        if v <= 0:
            raise ValueError('작업 주기는 1초 이상이어야 합니다')
        return v

    class Config:
        env_file = ".env"
        case_sensitive = False

# 싱글톤 인스턴스
settings = Settings()
