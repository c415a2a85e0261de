from polydoc.schema.naming import to_reference


def test_simple_name():
    assert to_reference('Post') == 'post'

def test_camel_case():
    assert to_reference('WeirdPost') == 'weird_post'

def test_namespace_prefix():
    assert to_reference('blog.models.WeirdPost') == 'weird_post'
    assert to_reference('Blog::WeirdPost') == 'weird_post'

def test_digits():
    assert to_reference('Post2Comment') == 'post2_comment'

def test_acronym_is_not_split():
    assert to_reference('HTTPServer') == 'httpserver'
