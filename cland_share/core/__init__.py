"""核心模块：配置、日志、状态码编解码与统一响应。"""
