"""
Factory Boy factories for users and posts.

Usage:
    from posts.tests.factories import PostFactory, UserFactory

    user = UserFactory()
    staff = UserFactory(is_staff=True)
    post = PostFactory(owner=user, is_approved=True)
"""

import factory
from django.contrib.auth import get_user_model

from posts.models import Post

PICTURE_KEY = "pics/1/1700000000000-aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa.jpg"
VIDEO_KEY = "vids/1/1700000000000-bbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbb.mp4"


class UserFactory(factory.django.DjangoModelFactory):
    """Factory for the default Django user."""

    class Meta:
        model = get_user_model()
        skip_postgeneration_save = True

    username = factory.Sequence(lambda n: f"builder{n}")
    email = factory.LazyAttribute(lambda o: f"{o.username}@example.com")
    is_active = True
    is_staff = False

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Override create to use UserManager.create_user()."""
        password = kwargs.pop("password", "TestPass123!")
        return model_class.objects.create_user(*args, password=password, **kwargs)


class PostFactory(factory.django.DjangoModelFactory):
    """
    Factory for Post.

    Examples:
        post = PostFactory()
        post = PostFactory(with_media=True)  # one picture, one video
    """

    class Meta:
        model = Post

    class Params:
        with_media = factory.Trait(
            pictures=factory.LazyAttribute(
                lambda o: [
                    {
                        "key": f"pics/{o.owner.pk}/1700000000000-{'a' * 32}.jpg",
                        "mime_type": "image/jpeg",
                        "size_bytes": 2048,
                    }
                ]
            ),
            videos=factory.LazyAttribute(
                lambda o: [
                    {
                        "key": f"vids/{o.owner.pk}/1700000000000-{'b' * 32}.mp4",
                        "mime_type": "video/mp4",
                        "size_bytes": 4096,
                    }
                ]
            ),
        )

    owner = factory.SubFactory(UserFactory)
    description = factory.Faker("sentence")
    band = Post.Band.BAND_144
    brand = "Yagi Works"
    is_self_built = False
    meters_from_sea = 120
    boom_length_cm = 250
    number_of_elements = 9
    number_of_antennas = 1
    cable = "RG-213"
    pictures = factory.LazyFunction(list)
    videos = factory.LazyFunction(list)
    is_approved = False
