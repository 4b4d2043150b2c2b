"""
API 核心組件模組 (Core API Components)

- config.py: 環境變數設定與 get_settings()
- logger_config.py: 應用程式日誌配置與格式設定
- models.py: API 請求/回應的 Pydantic 模型定義
- dependencies.py: FastAPI 依賴注入（快取、外部服務與核心元件的組裝）
- errors.py: 核心錯誤與 HTTP 狀態碼的對應

子模組不在此預先匯入，避免核心套件匯入 logger_config 時產生循環依賴。
"""
