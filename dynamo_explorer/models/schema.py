"""
Key-Schema Model

Static description of a table's partition/sort key and its secondary indexes,
built once from a DescribeTable response and replaced wholesale on refresh.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class IndexKind(str, Enum):
    """Secondary index flavours."""
    GLOBAL = "global"
    LOCAL = "local"


class KeyAttribute(BaseModel):
    """A key attribute and its scalar type (S, N or B)."""

    name: str = Field(..., description="Attribute name")
    type: Optional[str] = Field(None, description="Scalar attribute type (S, N, B)")

    model_config = ConfigDict(frozen=True)


class SecondaryIndex(BaseModel):
    """A global or local secondary index of a table."""

    name: str = Field(..., description="Index name")
    kind: IndexKind = Field(IndexKind.GLOBAL, description="Global or local index")
    partition_key: str = Field(..., description="Partition key attribute of the index")
    partition_key_type: Optional[str] = Field(None, description="Scalar type of the index partition key (S, N, B)")
    sort_key: Optional[str] = Field(None, description="Sort key attribute of the index")
    status: Optional[str] = Field(None, description="Index status (GSIs only)")

    model_config = ConfigDict(frozen=True)


class KeySchema(BaseModel):
    """Partition/sort key of a table plus its secondary indexes in catalog order.

    Global indexes come first in the order DynamoDB reports them, followed by
    local indexes.
    """

    partition_key: KeyAttribute
    sort_key: Optional[KeyAttribute] = None
    secondary_indexes: Tuple[SecondaryIndex, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def key_attribute_names(self) -> List[str]:
        names = [self.partition_key.name]
        if self.sort_key:
            names.append(self.sort_key.name)
        return names

    def index_for_partition_key(self, attribute_name: str) -> Optional[SecondaryIndex]:
        """First secondary index whose partition key is ``attribute_name``."""
        for index in self.secondary_indexes:
            if index.partition_key == attribute_name:
                return index
        return None

    def extract_key(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """Pick the primary key attributes out of a full item.

        Missing key attributes are simply left out; callers that need a
        complete key validate the result.
        """
        return {name: item[name] for name in self.key_attribute_names if name in item}

    @classmethod
    def from_table_description(cls, table: Dict[str, Any]) -> 'KeySchema':
        """Build a key schema from the ``Table`` block of a DescribeTable response."""
        attribute_types = {
            attr['AttributeName']: attr.get('AttributeType')
            for attr in table.get('AttributeDefinitions', [])
        }

        partition_name, sort_name = _split_key_schema(table.get('KeySchema', []))
        partition_key = KeyAttribute(name=partition_name or "", type=attribute_types.get(partition_name))
        sort_key = None
        if sort_name:
            sort_key = KeyAttribute(name=sort_name, type=attribute_types.get(sort_name))

        indexes = []
        for gsi in table.get('GlobalSecondaryIndexes', []):
            pk, sk = _split_key_schema(gsi.get('KeySchema', []))
            indexes.append(SecondaryIndex(
                name=gsi['IndexName'],
                kind=IndexKind.GLOBAL,
                partition_key=pk or "",
                partition_key_type=attribute_types.get(pk),
                sort_key=sk,
                status=gsi.get('IndexStatus'),
            ))
        for lsi in table.get('LocalSecondaryIndexes', []):
            pk, sk = _split_key_schema(lsi.get('KeySchema', []))
            indexes.append(SecondaryIndex(
                name=lsi['IndexName'],
                kind=IndexKind.LOCAL,
                partition_key=pk or "",
                partition_key_type=attribute_types.get(pk),
                sort_key=sk,
            ))

        return cls(partition_key=partition_key, sort_key=sort_key, secondary_indexes=tuple(indexes))


def _split_key_schema(elements: List[Dict[str, Any]]) -> Tuple[Optional[str], Optional[str]]:
    partition = None
    sort = None
    for element in elements:
        if element.get('KeyType') == 'HASH':
            partition = element['AttributeName']
        elif element.get('KeyType') == 'RANGE':
            sort = element['AttributeName']
    return partition, sort


class TableDescription(BaseModel):
    """Table metadata shown alongside the rows of a table."""

    name: str = Field(..., description="Table name")
    status: Optional[str] = Field(None, description="Table status (ACTIVE, CREATING, ...)")
    item_count: int = Field(0, description="Approximate item count reported by DynamoDB")
    size_bytes: int = Field(0, description="Approximate table size in bytes")
    key_schema: KeySchema
    raw: Dict[str, Any] = Field(default_factory=dict, description="Full DescribeTable payload")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_describe_response(cls, response: Dict[str, Any]) -> 'TableDescription':
        table = response['Table']
        return cls(
            name=table['TableName'],
            status=table.get('TableStatus'),
            item_count=int(table.get('ItemCount', 0)),
            size_bytes=int(table.get('TableSizeBytes', 0)),
            key_schema=KeySchema.from_table_description(table),
            raw=table,
        )
