# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""
领域层：

- models: ORM 实体（EntityMixin / User）
- schemas: Pydantic 请求/响应模型
- ports: 仓库接口（Repository）
"""
from . import models, ports, schemas  # noqa: F401

__all__ = ["models", "ports", "schemas"]
