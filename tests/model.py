from polydoc import Document, Embedded, Attribute, Reference, Referenced, Collection, Embed, EmbedCollection


class User(Document):
    name = Attribute()
    email = Attribute(indexed=True)
    post = Referenced('Post')


class Post(Document):
    name = Attribute()
    user = Reference('User')
    comments = Collection('Comment')
    weird_comments = Collection('Comment', 'weird_post')
    author = Embed('Author')
    authors = EmbedCollection('Author')


class Comment(Document):
    text = Attribute()
    post = Reference('Post')
    weird_post = Reference('Post')


class Author(Embedded):
    name = Attribute()
    email = Attribute()
    address = Embed('Address')


class Address(Embedded):
    street = Attribute()
    city = Attribute()
