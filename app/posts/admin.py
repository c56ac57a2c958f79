from django.contrib import admin

from posts.models import Post


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = ["id", "owner", "band", "brand", "is_approved", "created_at"]
    list_filter = ["band", "is_approved", "is_self_built"]
    search_fields = ["brand", "description", "owner__username"]
    readonly_fields = ["pictures", "videos", "created_at", "updated_at"]
    actions = ["approve_posts"]

    @admin.action(description="Approve selected posts")
    def approve_posts(self, request, queryset):
        queryset.update(is_approved=True)
