"""
数据模型定义
"""
# 标准库导包
from typing import Optional, List
from datetime import datetime

# 第三方库导包
from pydantic import BaseModel, ConfigDict, Field, field_validator


def _now() -> datetime:
    """当前本地时间，精确到秒（与数据库存储精度一致）"""
    return datetime.now().replace(microsecond=0)


# ========== 领域模型 ==========

class Tag(BaseModel):
    """标签

    相等性只比较id：新建未入库的标签（id=0）与同名的已入库标签不相等，
    按名称去重只发生在获取或创建标签的步骤中。
    """
    model_config = ConfigDict(from_attributes=True)

    id: int = 0
    name: Optional[str] = None
    color: int = Field(default=0, description="ARGB颜色整数")

    @field_validator("color", mode="before")
    @classmethod
    def _null_color(cls, value):
        return 0 if value is None else value

    def __eq__(self, other) -> bool:
        if not isinstance(other, Tag):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class Package(BaseModel):
    """规则包，相等性只比较id"""
    model_config = ConfigDict(from_attributes=True)

    id: int = 0
    name: Optional[str] = None
    description: Optional[str] = None
    file_path: Optional[str] = None
    version: Optional[str] = None

    def __eq__(self, other) -> bool:
        if not isinstance(other, Package):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class Backup(BaseModel):
    """角色备份，id=0 表示尚未入库"""
    model_config = ConfigDict(from_attributes=True)

    id: int = 0
    character_id: int = 0
    backup_path: Optional[str] = None
    backup_date: datetime = Field(default_factory=_now)


class Character(BaseModel):
    """角色聚合：标量字段加上标签、规则包、备份三个关联列表"""

    id: int = 0
    name: Optional[str] = None
    campaign: Optional[str] = None
    last_opened: datetime = Field(default_factory=_now)
    sheet_path: Optional[str] = None
    tags: Optional[List[Tag]] = Field(default_factory=list)
    packages: Optional[List[Package]] = Field(default_factory=list)
    backups: Optional[List[Backup]] = Field(default_factory=list)


# ========== 接口请求/响应模型 ==========

class CharacterRequest(BaseModel):
    """创建/更新角色请求模型"""
    name: Optional[str] = None
    campaign: Optional[str] = None
    last_opened: Optional[datetime] = None
    sheet_path: Optional[str] = None
    tags: List[Tag] = Field(default_factory=list, description="期望关联的标签")
    package_ids: List[int] = Field(default_factory=list, description="期望关联的规则包ID")
    backups: List[Backup] = Field(default_factory=list, description="期望保留的备份，id=0为新建")

    def to_character(
        self,
        character_id: int = 0,
        stored_last_opened: Optional[datetime] = None
    ) -> Character:
        """
        转换为角色聚合

        请求未给出last_opened时，更新沿用已保存的值，新建使用当前时间
        """
        return Character(
            id=character_id,
            name=self.name,
            campaign=self.campaign,
            last_opened=self.last_opened or stored_last_opened or _now(),
            sheet_path=self.sheet_path,
            tags=list(self.tags),
            packages=[Package(id=package_id) for package_id in self.package_ids],
            backups=list(self.backups),
        )


class TagRequest(BaseModel):
    """创建标签请求模型"""
    name: str = Field(..., min_length=1, description="标签名称")
    color: int = Field(default=0, description="ARGB颜色整数")


class PackageRequest(BaseModel):
    """创建规则包请求模型"""
    name: str = Field(..., min_length=1, description="规则包名称")
    description: Optional[str] = None
    file_path: str = Field(..., description="规则包文件路径")
    version: Optional[str] = None


class BackupRequest(BaseModel):
    """创建备份请求模型"""
    backup_path: str = Field(..., description="备份文件路径")
    backup_date: Optional[datetime] = None


class CharacterListResponse(BaseModel):
    """角色列表响应模型"""
    success: bool = True
    message: str = "获取成功"
    data: List[Character]
    total: int


class CharacterResponse(BaseModel):
    """单个角色响应模型"""
    success: bool = True
    message: str = "操作成功"
    data: Character


class TagResponse(BaseModel):
    """单个标签响应模型"""
    success: bool = True
    message: str = "操作成功"
    data: Tag


class PackageResponse(BaseModel):
    """单个规则包响应模型"""
    success: bool = True
    message: str = "操作成功"
    data: Package


class BackupResponse(BaseModel):
    """单个备份响应模型"""
    success: bool = True
    message: str = "操作成功"
    data: Backup


class TagListResponse(BaseModel):
    """标签列表响应模型"""
    success: bool = True
    message: str = "获取成功"
    data: List[Tag]


class PackageListResponse(BaseModel):
    """规则包列表响应模型"""
    success: bool = True
    message: str = "获取成功"
    data: List[Package]


class BackupListResponse(BaseModel):
    """备份列表响应模型"""
    success: bool = True
    message: str = "获取成功"
    data: List[Backup]


class MessageResponse(BaseModel):
    """通用消息响应模型"""
    success: bool = True
    message: str
