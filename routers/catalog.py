"""
标签与规则包路由
"""
# 标准库导包
import logging

# 第三方库导包
from fastapi import APIRouter, HTTPException, Depends

# 项目内部导包
from models import (
    MessageResponse,
    Package,
    PackageListResponse,
    PackageRequest,
    PackageResponse,
    Tag,
    TagListResponse,
    TagRequest,
    TagResponse
)
from storage.errors import PackageInUseError, StorageError
from routers.dependencies import get_character_service
from routers.services.character_service import CharacterService

# 配置日志
logger = logging.getLogger(__name__)

# 创建路由器
router = APIRouter(
    tags=["标签与规则包"]
)


@router.get("/tags", response_model=TagListResponse, summary="获取标签列表")
async def list_tags(service: CharacterService = Depends(get_character_service)):
    """获取所有标签，按名称排序"""
    try:
        return TagListResponse(data=await service.get_all_tags())
    except StorageError as e:
        logger.error(f"获取标签列表失败: {str(e)}")
        raise HTTPException(status_code=400, detail=f"获取标签列表失败: {str(e)}")


@router.post("/tags", response_model=TagResponse, summary="创建标签")
async def create_tag(
    request: TagRequest,
    service: CharacterService = Depends(get_character_service)
):
    """
    创建标签

    同名标签已存在时返回已有标签的ID，颜色不会被覆盖
    """
    try:
        tag = await service.add_tag(Tag(name=request.name, color=request.color))
        return TagResponse(message="创建成功", data=tag)
    except StorageError as e:
        logger.error(f"创建标签失败: {str(e)}")
        raise HTTPException(status_code=400, detail=f"创建标签失败: {str(e)}")


@router.delete("/tags/{tag_id}", response_model=MessageResponse, summary="删除标签")
async def delete_tag(
    tag_id: int,
    service: CharacterService = Depends(get_character_service)
):
    """删除标签，所有角色上的该标签会一并移除"""
    try:
        deleted = await service.delete_tag(tag_id)
    except StorageError as e:
        logger.error(f"删除标签失败: {str(e)}")
        raise HTTPException(status_code=400, detail=f"删除标签失败: {str(e)}")

    if not deleted:
        raise HTTPException(status_code=404, detail="标签不存在")
    return MessageResponse(message="删除成功")


@router.get("/packages", response_model=PackageListResponse, summary="获取规则包列表")
async def list_packages(service: CharacterService = Depends(get_character_service)):
    """获取所有规则包，按名称排序"""
    try:
        return PackageListResponse(data=await service.get_all_packages())
    except StorageError as e:
        logger.error(f"获取规则包列表失败: {str(e)}")
        raise HTTPException(status_code=400, detail=f"获取规则包列表失败: {str(e)}")


@router.post("/packages", response_model=PackageResponse, summary="创建规则包")
async def create_package(
    request: PackageRequest,
    service: CharacterService = Depends(get_character_service)
):
    try:
        package = await service.add_package(Package(**request.model_dump()))
        return PackageResponse(message="创建成功", data=package)
    except StorageError as e:
        logger.error(f"创建规则包失败: {str(e)}")
        raise HTTPException(status_code=400, detail=f"创建规则包失败: {str(e)}")


@router.delete("/packages/{package_id}", response_model=MessageResponse, summary="删除规则包")
async def delete_package(
    package_id: int,
    service: CharacterService = Depends(get_character_service)
):
    """
    删除规则包

    仍有角色使用该规则包时返回409，不做任何修改
    """
    try:
        package = next(
            (p for p in await service.get_all_packages() if p.id == package_id),
            None
        )
        if package is None:
            raise HTTPException(status_code=404, detail="规则包不存在")

        await service.delete_package(package)
        return MessageResponse(message="删除成功")
    except PackageInUseError as e:
        logger.warning(f"删除规则包被拒绝: {str(e)}")
        raise HTTPException(status_code=409, detail=str(e))
    except StorageError as e:
        logger.error(f"删除规则包失败: {str(e)}")
        raise HTTPException(status_code=400, detail=f"删除规则包失败: {str(e)}")
