"""
JuanMap API 模組 (FastAPI Backend)

地圖前端的 REST+JSON 介面，將核心元件的結果包裝為 {success, data} 回應。

模組結構：
- core/: 核心 API 組件 (設定、日誌、模型、依賴注入、錯誤對應)
- routes/: API 路由與端點處理器
- middleware/: 請求日誌中間件
- cache/: 快取系統 (Redis + 記憶體快取備案)
- main.py: FastAPI 應用程式
"""
