from tortoise import fields
from tortoise.models import Model


class Service(Model):
    id = fields.IntField(primary_key=True)
    title = fields.CharField(max_length=255)
    description = fields.TextField(null=True)
    icon = fields.CharField(max_length=255, null=True)
    published = fields.BooleanField(default=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "services"


class Blog(Model):
    id = fields.IntField(primary_key=True)
    title = fields.CharField(max_length=255)
    summary = fields.TextField(null=True)
    content = fields.TextField(null=True)
    image = fields.TextField(null=True)
    published = fields.BooleanField(default=False)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "blogs"


class Testimonial(Model):
    id = fields.IntField(primary_key=True)
    name = fields.CharField(max_length=255)
    text = fields.TextField()
    image = fields.TextField(null=True)
    rating = fields.IntField(default=5)
    published = fields.BooleanField(default=False)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "testimonials"
