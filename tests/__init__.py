#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
wecom 测试套件包

包结构：
    tests/
    ├── __init__.py           - 测试包初始化
    ├── conftest.py           - pytest 配置和共享 fixtures
    ├── test_api_base.py      - 传输适配器和请求引擎测试
    ├── test_auth.py          - 令牌提供者和令牌缓存测试
    ├── test_client.py        - 客户端端到端测试
    ├── test_config.py        - 配置模块测试
    ├── test_directory.py     - 通讯录 API 测试
    ├── test_envelope.py      - 响应分类测试
    ├── test_message.py       - 应用消息 API 测试
    └── test_validators.py    - 输入验证测试

运行测试：
    $ pytest tests/
    $ pytest tests/ --cov=wecom
"""
