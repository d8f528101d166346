"""
Comment threads: flat rows in, nested replies out.
"""


def build_comment_tree(comments):
    """
    Nest comment dicts under their parent. Each node gets a `replies` list; rows whose
    parent is missing from the input become roots. Input order is kept at every level.
    """
    nodes = {c['id']: dict(c, replies=[]) for c in comments}
    roots = []
    for comment in comments:
        node = nodes[comment['id']]
        parent = nodes.get(comment.get('parent_id'))
        if parent is not None and parent is not node:
            parent['replies'].append(node)
        else:
            roots.append(node)
    return roots


def count_comments(tree):
    """Top-level comments plus every nested reply"""
    return sum(1 + count_comments(node.get('replies') or []) for node in tree)
