import pytest
from polydoc import Document, InvalidClassError
from polydoc.schema.attribute import KeyAttribute
from tests.model import User, Post, Comment


def test_reference_declares_indexed_id_attribute():
    assert isinstance(Comment.__dict__['post_id'], KeyAttribute)
    assert 'post_id' in Comment._indices
    assert 'weird_post_id' in Comment._indices

def test_reference_is_none_by_default(store):
    comment = Comment(text='first')

    assert comment.post_id is None
    assert comment.post is None
    assert store.lookups == []

def test_assignment_sets_id_and_memoizes(store):
    post = Post.create(name='New')
    comment = Comment(text='first')
    store.lookups.clear()

    comment.post = post

    assert comment.post_id == post.id
    assert comment.post is post
    assert store.lookups == []

def test_assignment_of_wrong_class(store):
    post = Post.create(name='New')
    comment = Comment(text='first', post=post)

    with pytest.raises(InvalidClassError):
        comment.post = 'not a post'
    with pytest.raises(TypeError):
        comment.post = User.create(name='foo')

    assert comment.post_id == post.id
    assert comment.post is post

def test_assignment_rejects_subclass(store):
    class SpecialPost(Post):
        pass

    comment = Comment(text='first')
    with pytest.raises(InvalidClassError):
        comment.post = SpecialPost(name='special')
    assert comment.post_id is None

def test_assignment_of_none(store):
    post = Post.create(name='New')
    comment = Comment(text='first', post=post)
    store.lookups.clear()

    comment.post = None

    assert comment.post_id is None
    assert comment.post is None
    assert store.lookups == []

def test_id_writer_clears_memo(store):
    post1 = Post.create(name='one')
    post2 = Post.create(name='two')
    comment = Comment(text='first', post=post1)

    comment.post_id = post2.id

    assert comment.post == post2
    assert comment.post is not post2
    assert store.lookups[-1] == ('get', 'Post', post2.id)

def test_update_attributes_with_id_clears_memo(store):
    post1 = Post.create(name='one')
    post2 = Post.create(name='two')
    comment = Comment.create(text='first', post=post1)
    assert comment.post is post1

    comment.update_attributes(post_id=post2.id)

    assert comment.post_id == post2.id
    assert comment.post == post2
    assert store.lookups[-1] == ('get', 'Post', post2.id)

def test_update_attributes_checks_before_writing(store):
    post = Post.create(name='one')
    comment = Comment.create(text='first', post=post)

    with pytest.raises(InvalidClassError):
        comment.update_attributes(text='changed', post=User(name='foo'))

    assert comment.text == 'first'
    assert comment.post is post

def test_id_writer_none_skips_lookup(store):
    post = Post.create(name='New')
    comment = Comment(text='first', post=post)
    store.lookups.clear()

    comment.post_id = None

    assert comment.post is None
    assert store.lookups == []

def test_reader_fetches_once(store):
    post = Post.create(name='New')
    comment = Comment.create(text='first', post=post)
    comment = Comment.get(comment.id)
    store.lookups.clear()

    assert comment.post == post
    assert comment.post == post
    assert store.lookups == [('get', 'Post', post.id)]

def test_reader_with_dangling_id(store):
    comment = Comment(text='first')
    comment.post_id = 'missing'

    assert comment.post is None

def test_reference_survives_save_and_load(store):
    post = Post.create(name='New')
    comment = Comment.create(text='first', post=post)

    loaded = Comment.get(comment.id)

    assert loaded.post_id == post.id
    assert loaded.post.name == 'New'

def test_reference_declared_with_builder(store):
    class Note(Document):
        pass

    Note.reference('owner', User)
    user = User.create(name='foo')
    note = Note(owner=user)

    assert note.owner_id == user.id
    assert 'owner_id' in Note._indices
    with pytest.raises(InvalidClassError):
        note.owner = Note()
