"""Post files: front matter parsing, loading, read time and scaffolding."""

from postkit.content.frontmatter import (
    parse_frontmatter,
    parse_frontmatter_file,
    render_post,
    split_frontmatter,
    update_frontmatter_field,
)
from postkit.content.post import Post, iter_post_paths, load_post, load_posts, parse_post_filename
from postkit.content.reading import count_words, estimate_read_time
from postkit.content.schema import PostFrontmatter
from postkit.content.writer import write_post

__all__ = [
    "Post",
    "PostFrontmatter",
    "count_words",
    "estimate_read_time",
    "iter_post_paths",
    "load_post",
    "load_posts",
    "parse_frontmatter",
    "parse_frontmatter_file",
    "parse_post_filename",
    "render_post",
    "split_frontmatter",
    "update_frontmatter_field",
    "write_post",
]
