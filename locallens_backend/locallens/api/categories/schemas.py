# locallens/api/categories/schemas.py
from marshmallow import Schema, fields


class CategorySchema(Schema):
    category_id = fields.Str(data_key="id")
    name = fields.Str(required=True)
    icon = fields.Str(allow_none=True)
