"""HTTP 边界：请求校验、服务函数与 FastAPI 应用。"""
