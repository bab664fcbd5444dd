import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="IdSequence",
            fields=[
                ("scope", models.CharField(max_length=64, primary_key=True, serialize=False)),
                ("last_value", models.BigIntegerField(default=0)),
            ],
            options={
                "db_table": "id_sequences",
            },
        ),
        migrations.CreateModel(
            name="User",
            fields=[
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                ("id", models.BigIntegerField(primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("gender", models.CharField(blank=True, choices=[("Male", "Male"), ("Female", "Female")], max_length=10, null=True)),
                ("age", models.PositiveIntegerField(blank=True, null=True)),
                ("deleted", models.BooleanField(default=False)),
                ("follower_count", models.PositiveIntegerField(default=0)),
                ("following_count", models.PositiveIntegerField(default=0)),
            ],
            options={
                "db_table": "users",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="Recipe",
            fields=[
                ("id", models.BigIntegerField(primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=500)),
                ("description", models.TextField(blank=True, null=True)),
                ("category", models.CharField(blank=True, max_length=255, null=True)),
                ("cook_time", models.CharField(blank=True, max_length=50, null=True)),
                ("prep_time", models.CharField(blank=True, max_length=50, null=True)),
                ("total_time", models.CharField(blank=True, max_length=50, null=True)),
                ("date_published", models.DateTimeField(blank=True, null=True)),
                ("calories", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("fat_content", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("saturated_fat_content", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("cholesterol_content", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("sodium_content", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("carbohydrate_content", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("fiber_content", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("sugar_content", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("protein_content", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("servings", models.CharField(blank=True, max_length=100, null=True)),
                ("recipe_yield", models.CharField(blank=True, max_length=100, null=True)),
                ("aggregated_rating", models.DecimalField(blank=True, decimal_places=2, max_digits=3, null=True)),
                ("review_count", models.PositiveIntegerField(default=0)),
                ("author", models.ForeignKey(db_column="author_id", on_delete=django.db.models.deletion.PROTECT, related_name="recipes", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "recipes",
            },
        ),
        migrations.CreateModel(
            name="Ingredient",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("part", models.CharField(max_length=500)),
                ("recipe", models.ForeignKey(db_column="recipe_id", on_delete=django.db.models.deletion.CASCADE, related_name="ingredients", to="cookbook.recipe")),
            ],
            options={
                "db_table": "ingredients",
            },
        ),
        migrations.CreateModel(
            name="Review",
            fields=[
                ("id", models.BigIntegerField(primary_key=True, serialize=False)),
                ("rating", models.PositiveSmallIntegerField()),
                ("text", models.TextField()),
                ("submitted_at", models.DateTimeField()),
                ("modified_at", models.DateTimeField()),
                ("like_count", models.PositiveIntegerField(default=0)),
                ("author", models.ForeignKey(db_column="author_id", on_delete=django.db.models.deletion.PROTECT, related_name="reviews", to=settings.AUTH_USER_MODEL)),
                ("recipe", models.ForeignKey(db_column="recipe_id", on_delete=django.db.models.deletion.CASCADE, related_name="reviews", to="cookbook.recipe")),
            ],
            options={
                "db_table": "reviews",
            },
        ),
        migrations.CreateModel(
            name="FollowEdge",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("follower", models.ForeignKey(db_column="follower_id", on_delete=django.db.models.deletion.CASCADE, related_name="following_edges", to=settings.AUTH_USER_MODEL)),
                ("followee", models.ForeignKey(db_column="followee_id", on_delete=django.db.models.deletion.CASCADE, related_name="follower_edges", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "follow_edges",
            },
        ),
        migrations.CreateModel(
            name="ReviewLike",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("review", models.ForeignKey(db_column="review_id", on_delete=django.db.models.deletion.CASCADE, related_name="likes", to="cookbook.review")),
                ("liker", models.ForeignKey(db_column="liker_id", on_delete=django.db.models.deletion.CASCADE, related_name="review_likes", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "like_edges",
            },
        ),
        migrations.AddConstraint(
            model_name="user",
            constraint=models.CheckConstraint(condition=models.Q(("id__gt", 0)), name="chk_user_id_positive"),
        ),
        migrations.AddIndex(
            model_name="recipe",
            index=models.Index(fields=["author"], name="recipes_author_idx"),
        ),
        migrations.AddIndex(
            model_name="recipe",
            index=models.Index(fields=["category"], name="recipes_category_idx"),
        ),
        migrations.AddConstraint(
            model_name="recipe",
            constraint=models.CheckConstraint(
                condition=models.Q(("aggregated_rating__isnull", True), models.Q(("aggregated_rating__gte", 0), ("aggregated_rating__lte", 5)), _connector="OR"),
                name="chk_recipe_rating_range",
            ),
        ),
        migrations.AddConstraint(
            model_name="ingredient",
            constraint=models.UniqueConstraint(fields=("recipe", "part"), name="uniq_ingredient_recipe_part"),
        ),
        migrations.AddIndex(
            model_name="review",
            index=models.Index(fields=["recipe"], name="reviews_recipe_idx"),
        ),
        migrations.AddIndex(
            model_name="review",
            index=models.Index(fields=["author"], name="reviews_author_idx"),
        ),
        migrations.AddConstraint(
            model_name="review",
            constraint=models.CheckConstraint(condition=models.Q(("rating__gte", 1), ("rating__lte", 5)), name="chk_review_rating_range"),
        ),
        migrations.AddIndex(
            model_name="followedge",
            index=models.Index(fields=["follower"], name="follow_edges_follower_idx"),
        ),
        migrations.AddIndex(
            model_name="followedge",
            index=models.Index(fields=["followee"], name="follow_edges_followee_idx"),
        ),
        migrations.AddConstraint(
            model_name="followedge",
            constraint=models.UniqueConstraint(fields=("follower", "followee"), name="uniq_follow_edge_follower_followee"),
        ),
        migrations.AddConstraint(
            model_name="followedge",
            constraint=models.CheckConstraint(condition=models.Q(("follower", models.F("followee")), _negated=True), name="chk_follow_edge_not_self"),
        ),
        migrations.AddIndex(
            model_name="reviewlike",
            index=models.Index(fields=["liker"], name="like_edges_liker_idx"),
        ),
        migrations.AddConstraint(
            model_name="reviewlike",
            constraint=models.UniqueConstraint(fields=("review", "liker"), name="uniq_review_like_review_liker"),
        ),
    ]
