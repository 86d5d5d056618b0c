"""
路由依赖
"""
# 第三方库导包
from fastapi import Request

# 项目内部导包
from routers.services.character_service import CharacterService


def get_character_service(request: Request) -> CharacterService:
    """
    从应用状态中取出数据库句柄并构建角色服务

    数据库句柄在应用生命周期开始时创建，保存在 app.state.database
    """
    return CharacterService(request.app.state.database)
