BASIC_GRAMMAR = r"""
    start: one_line*

    one_line: [statement] _SEP

    // --- Statements ---
    ?statement: if_stmt
              | while_stmt
              | let_stmt
              | cluster

    if_stmt: "if" primary cluster ["else" cluster]
    while_stmt: "while" primary cluster
    let_stmt: "let" [MACRO] identifier [params] "=" cluster

    ?cluster: expr
            | block
            | scope

    block: "{" _stmt_lst "}"
    scope: "[" _stmt_lst "]"
    _stmt_lst: [statement] (_SEP [statement])*

    // --- Expressions ---
    ?expr: factors_chain
         | function

    factors_chain: factor (op factor)*

    ?factor: MINUS primary -> negative
           | primary

    ?primary: "(" expr ")"
            | number
            | expandable
            | string

    expandable: identifier postfix*

    ?postfix: "(" expr ")"
            | block
            | scope
            | number
            | identifier
            | string
            | underline

    function: FUN params _ARROW cluster

    params: identifier+

    // --- Fused lexical rules ---
    identifier: IDENT
    number: NUMBER
    string: STRING
    underline: UNDERLINE
    op: OP | MINUS

    IDENT: /(?!(?:fun|if|while|let|else|macro|_)(?!\w))[^\W\d]\w*/
    NUMBER: /[0-9]+/
    STRING: /"(?:\\.|[^"\\\n])*"/
    UNDERLINE: "_"
    MACRO: "macro"
    FUN: "fun"
    OP: /<-|==|!=|<(?!-)|[+*\/%>]/
    MINUS: "-"
    _SEP: /[;\n]/
    _ARROW: "->"
    WS: /[ \t\x0b\f\r]+/

    %ignore WS
"""
