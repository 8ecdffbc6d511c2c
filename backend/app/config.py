# app/config.py
# 统一配置管理
# 配置优先级: 环境变量 > config/user.json > 代码默认值
import os
import json
import logging
from datetime import date
from pathlib import Path
from typing import Dict, Any, List

logger = logging.getLogger(__name__)

# ==================== 基础路径 ====================
BASE_DIR = Path(__file__).resolve().parent.parent.parent


# ==================== 辅助函数 ====================
def _strip_value(value: Any) -> Any:
    """对字符串值去除首尾空白，其他类型原样返回"""
    if isinstance(value, str):
        return value.strip()
    return value


def _strip_list(values: list) -> list:
    """对列表中每个字符串元素去除首尾空白"""
    return [_strip_value(v) for v in values]


# ==================== 用户配置文件 ====================
def _load_user_config() -> Dict[str, Any]:
    """加载用户配置文件 config/user.json（如果存在）"""
    config_path = BASE_DIR / "config" / "user.json"
    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Failed to load user config from {config_path}: {e}")
    return {}


def _get_config(key: str, default: Any = None, env_var: str = "", strip: bool = True) -> Any:
    """
    获取配置值，优先级：环境变量 > user.json > 默认值

    Args:
        key: user.json 中的键路径（点分隔，如 "backend.port"）
        default: 默认值
        env_var: 环境变量名
        strip: 是否对字符串值去除首尾空白（默认 True）
    """
    # 1. 优先检查环境变量
    if env_var and env_var in os.environ:
        value = os.environ[env_var]
        return _strip_value(value) if strip else value

    # 2. 检查 user.json（每次调用都重新读取文件）
    user_config = _load_user_config()
    if user_config:
        keys = key.split(".")
        value = user_config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                value = None
                break
        if value is not None:
            return _strip_value(value) if strip else value

    # 3. 返回默认值
    return default


def _get_str_config(key: str, default: str = "", env_var: str = "") -> str:
    """获取字符串配置，确保返回字符串类型并去除空白"""
    value = _get_config(key, default, env_var, strip=True)
    if value is None:
        return default
    return str(value)


def _get_int_config(key: str, default: int = 0, env_var: str = "") -> int:
    """获取整数配置，支持字符串转整数"""
    value = _get_config(key, default, env_var, strip=True)
    if value is None:
        return default
    try:
        return int(value)
    except (ValueError, TypeError):
        return default


def _get_float_config(key: str, default: float = 0.0, env_var: str = "") -> float:
    """获取浮点数配置，支持字符串转浮点数"""
    value = _get_config(key, default, env_var, strip=True)
    if value is None:
        return default
    try:
        return float(value)
    except (ValueError, TypeError):
        return default


def _get_bool_config(key: str, default: bool = False, env_var: str = "") -> bool:
    """获取布尔配置，支持字符串转布尔"""
    value = _get_config(key, default, env_var, strip=True)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in ("true", "1", "yes", "on")
    return bool(value)


def _get_date_config(key: str, default: date, env_var: str = "") -> date:
    """获取日期配置（ISO 格式 YYYY-MM-DD），解析失败时返回默认值"""
    value = _get_config(key, None, env_var, strip=True)
    if value is None:
        return default
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        logger.warning(f"Invalid date for {key}: {value!r}, falling back to {default}")
        return default


def _get_cors_origins() -> List[str]:
    """获取 CORS 允许的 origins 列表"""
    # 1. 从环境变量获取（最高优先级）
    env_origins = os.getenv("CORS_ORIGINS")
    if env_origins:
        return [v.strip() for v in env_origins.split(",") if v.strip()]

    # 2. 从 user.json 读取 cors.allowed_origins
    user_origins = _get_config("cors.allowed_origins", None, strip=False)
    if user_origins and isinstance(user_origins, list):
        return _strip_list(user_origins)

    # 3. 默认值：允许所有来源（词典数据是公开只读的）
    return ["*"]


# ==================== 路径配置 ====================
def _resolve_path(path: str) -> str:
    """解析路径: 相对路径基于 BASE_DIR, 绝对路径直接返回"""
    path = path.strip() if isinstance(path, str) else str(path)
    if os.path.isabs(path):
        return path
    return str(BASE_DIR / path)


def _get_data_dir() -> str:
    """获取数据目录"""
    if "DATA_DIR" in os.environ:
        return _resolve_path(os.environ["DATA_DIR"])
    user_path = _get_str_config("paths.data_dir", "data")
    return _resolve_path(user_path)


DATA_DIR = _get_data_dir()

# ==================== 数据库 ====================
DB_PATH = os.path.join(DATA_DIR, "dictionary.db")
SQLALCHEMY_DATABASE_URL = _get_str_config("database.url", f"sqlite:///{DB_PATH}", "DATABASE_URL")

# 单条查询的超时时间（秒）: SQLite 的 busy timeout / PostgreSQL 的 statement_timeout
DATABASE_TIMEOUT = _get_float_config("database.timeout", 10.0, "DB_TIMEOUT")
DATABASE_POOL_SIZE = _get_int_config("database.pool_size", 5, "DB_POOL_SIZE")

# ==================== 服务器 ====================
HOST = _get_str_config("backend.host", "0.0.0.0", "HOST")
PORT = _get_int_config("backend.port", 3000, "PORT")
API_VERSION = "1.0.0"

# ==================== CORS ====================
CORS_ALLOWED_ORIGINS = _get_cors_origins()
# 通配来源下不允许携带凭证
CORS_ALLOW_CREDENTIALS = "*" not in CORS_ALLOWED_ORIGINS

# ==================== 数据查询 ====================
QUERY_MAX_LIMIT = _get_int_config("query.max_limit", 500, "QUERY_MAX_LIMIT")
CEFR_DEFAULT_PAGE_SIZE = _get_int_config("cefr.default_page_size", 10, "CEFR_DEFAULT_PAGE_SIZE")
# 页码上限: 保证 OFFSET 不超出数据库整数范围
CEFR_MAX_PAGE = _get_int_config("cefr.max_page", 100000, "CEFR_MAX_PAGE")

# ==================== 每日一词 ====================
# 起始日: 该日期对应候选列表中的第 1 个词
WORD_OF_THE_DAY_EPOCH = _get_date_config("word_of_the_day.epoch", date(2024, 1, 1), "WORD_OF_THE_DAY_EPOCH")
# 只有长度严格大于该值的词才会成为候选
WORD_OF_THE_DAY_MIN_LENGTH = _get_int_config("word_of_the_day.min_length", 5, "WORD_OF_THE_DAY_MIN_LENGTH")

# ==================== 错误处理 ====================
# 500 响应是否直接返回数据库异常信息（生产环境建议关闭）
EXPOSE_ERROR_DETAILS = _get_bool_config("errors.expose_details", True, "EXPOSE_ERROR_DETAILS")

# ==================== 日志 ====================
LOG_LEVEL = _get_str_config("logging.level", "INFO", "LOG_LEVEL")
