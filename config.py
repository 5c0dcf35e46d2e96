"""
Configuration module for the Precedence Scheduler.
Loads settings from environment variables or .env file.
Precedence Scheduler 配置模块。
从环境变量或 .env 文件加载所有配置项。
"""

import os
from dotenv import load_dotenv

load_dotenv()  # 自动读取项目根目录的 .env 文件（若存在），优先级低于系统环境变量

# --- Worker Pool ---
# --- 工作者池 ---
SCHEDULER_WORKERS = int(os.getenv("SCHEDULER_WORKERS", "5"))  # 模拟中同时运行任务的工作者数量

# --- Duration Policy ---
# --- 时长策略 ---
# cost(id) = (id - 'A') + DURATION_BASE_OFFSET, so step A takes 61 seconds by default.
# 默认 A 耗时 61，B 耗时 62，依此类推。
DURATION_BASE_OFFSET = int(os.getenv("DURATION_BASE_OFFSET", "61"))

# --- Cycle Handling ---
# --- 环处理 ---
# true: raise CycleDetectedError | false: log a warning and return the partial result
# true：检测到环时抛出 CycleDetectedError | false：记录警告并返回部分结果
FAIL_ON_CYCLE = os.getenv("FAIL_ON_CYCLE", "true").lower() == "true"
