"""
角色路由
提供角色聚合的增删改查、最后打开时间更新和备份管理接口
"""
# 标准库导包
import logging

# 第三方库导包
from fastapi import APIRouter, HTTPException, Depends

# 项目内部导包
from models import (
    Backup,
    BackupListResponse,
    BackupRequest,
    BackupResponse,
    Character,
    CharacterListResponse,
    CharacterRequest,
    CharacterResponse,
    MessageResponse
)
from storage.errors import StorageError
from routers.dependencies import get_character_service
from routers.services.character_service import CharacterService

# 配置日志
logger = logging.getLogger(__name__)

# 创建路由器
router = APIRouter(
    tags=["角色管理"]
)


async def _require_character(service: CharacterService, character_id: int) -> Character:
    """获取角色，不存在时返回404"""
    character = await service.get_character(character_id)
    if character is None:
        raise HTTPException(status_code=404, detail="角色不存在")
    return character


@router.get("/characters", response_model=CharacterListResponse, summary="获取角色列表")
async def list_characters(service: CharacterService = Depends(get_character_service)):
    """
    获取所有角色，按最后打开时间从新到旧排列
    """
    try:
        characters = await service.get_all_characters()
        return CharacterListResponse(data=characters, total=len(characters))
    except StorageError as e:
        logger.error(f"获取角色列表失败: {str(e)}")
        raise HTTPException(status_code=400, detail=f"获取角色列表失败: {str(e)}")


@router.post("/characters", response_model=CharacterResponse, summary="创建角色")
async def create_character(
    request: CharacterRequest,
    service: CharacterService = Depends(get_character_service)
):
    """
    创建角色，同时关联请求中的标签（按名称获取或创建）和规则包（按ID）
    """
    try:
        character = await service.add_character(request.to_character())
        return CharacterResponse(message="创建成功", data=character)
    except StorageError as e:
        logger.error(f"创建角色失败: {str(e)}")
        raise HTTPException(status_code=400, detail=f"创建角色失败: {str(e)}")


@router.get("/characters/{character_id}", response_model=CharacterResponse, summary="获取角色详情")
async def get_character(
    character_id: int,
    service: CharacterService = Depends(get_character_service)
):
    try:
        character = await _require_character(service, character_id)
        return CharacterResponse(message="获取成功", data=character)
    except StorageError as e:
        logger.error(f"获取角色失败: {str(e)}")
        raise HTTPException(status_code=400, detail=f"获取角色失败: {str(e)}")


@router.put("/characters/{character_id}", response_model=CharacterResponse, summary="更新角色")
async def update_character(
    character_id: int,
    request: CharacterRequest,
    service: CharacterService = Depends(get_character_service)
):
    """
    更新角色，并把标签、规则包、备份同步为请求中给出的状态

    请求中未出现的关联会被移除，id=0 的备份会被新建
    """
    try:
        existing = await _require_character(service, character_id)
        character = await service.update_character(
            request.to_character(character_id, existing.last_opened)
        )
        if character is None:
            raise HTTPException(status_code=404, detail="角色不存在")
        return CharacterResponse(message="更新成功", data=character)
    except StorageError as e:
        logger.error(f"更新角色失败: {str(e)}")
        raise HTTPException(status_code=400, detail=f"更新角色失败: {str(e)}")


@router.post("/characters/{character_id}/opened", response_model=CharacterResponse, summary="记录角色打开")
async def mark_character_opened(
    character_id: int,
    service: CharacterService = Depends(get_character_service)
):
    """把角色的最后打开时间设为当前时间"""
    try:
        character = await _require_character(service, character_id)
        character = await service.update_last_opened(character)
        return CharacterResponse(message="更新成功", data=character)
    except StorageError as e:
        logger.error(f"更新最后打开时间失败: {str(e)}")
        raise HTTPException(status_code=400, detail=f"更新最后打开时间失败: {str(e)}")


@router.delete("/characters/{character_id}", response_model=MessageResponse, summary="删除角色")
async def delete_character(
    character_id: int,
    service: CharacterService = Depends(get_character_service)
):
    """删除角色及其全部关联和备份，标签和规则包本身保留"""
    try:
        deleted = await service.delete_character(Character(id=character_id))
    except StorageError as e:
        logger.error(f"删除角色失败: {str(e)}")
        raise HTTPException(status_code=400, detail=f"删除角色失败: {str(e)}")

    if not deleted:
        raise HTTPException(status_code=404, detail="角色不存在")
    return MessageResponse(message="删除成功")


@router.get("/characters/{character_id}/backups", response_model=BackupListResponse, summary="获取角色备份")
async def list_backups(
    character_id: int,
    service: CharacterService = Depends(get_character_service)
):
    """获取角色的备份列表，按备份时间从新到旧排列"""
    try:
        backups = await service.get_backups_for_character(character_id)
        return BackupListResponse(data=backups)
    except StorageError as e:
        logger.error(f"获取备份列表失败: {str(e)}")
        raise HTTPException(status_code=400, detail=f"获取备份列表失败: {str(e)}")


@router.post("/characters/{character_id}/backups", response_model=BackupResponse, summary="添加备份")
async def create_backup(
    character_id: int,
    request: BackupRequest,
    service: CharacterService = Depends(get_character_service)
):
    try:
        await _require_character(service, character_id)
        backup = Backup(character_id=character_id, backup_path=request.backup_path)
        if request.backup_date is not None:
            backup.backup_date = request.backup_date
        backup = await service.add_backup(backup)
        return BackupResponse(message="创建成功", data=backup)
    except StorageError as e:
        logger.error(f"添加备份失败: {str(e)}")
        raise HTTPException(status_code=400, detail=f"添加备份失败: {str(e)}")


@router.delete("/backups/{backup_id}", response_model=MessageResponse, summary="删除备份")
async def delete_backup(
    backup_id: int,
    service: CharacterService = Depends(get_character_service)
):
    try:
        deleted = await service.delete_backup(backup_id)
    except StorageError as e:
        logger.error(f"删除备份失败: {str(e)}")
        raise HTTPException(status_code=400, detail=f"删除备份失败: {str(e)}")

    if not deleted:
        raise HTTPException(status_code=404, detail="备份不存在")
    return MessageResponse(message="删除成功")
