"""
Built-in Ontario learning-skills comment bank.

Entries are (level, text) pairs grouped by learning-skill label. Texts use the
legacy single-brace markers ({Name}, {hishertheir}, ...); the seed routine
normalizes them to {{...}} placeholders before writing.
"""

ONTARIO_CATEGORIES = [
    "Responsibility",
    "Organization",
    "Independent Work",
    "Collaboration",
    "Initiative",
    "Self Regulation",
]

CONCLUSION_CATEGORY = "Conclusion"

ONTARIO_DATA = {
    "Responsibility": [
        ("E", "{Name} consistently engages in lessons and contributes meaningfully to discussions."),
        ("E", "{Name}'s regular participation enriches our class dialogues."),
        ("E", "{Name} demonstrates attentive listening through maintained eye contact and focused posture."),
        ("E", "During discussions, {Name} avoids distractions and models active listening strategies."),
        ("E", "{Name} fosters a welcoming environment by valuing diverse perspectives."),
        ("E", "{Name} consistently shows care and inclusivity toward classmates."),
        ("E", "{Name} sets an exemplary standard by taking ownership of {hishertheir} actions and treating peers with respect."),
        ("E", "As a class leader, {Name} balances integrity with kindness in all interactions."),
        ("E", "{Name} reliably submits high-quality work ahead of deadlines, often going beyond requirements."),
        ("E", "Assignments from {Name} are consistently thorough and punctual."),
        ("E", "{Name} proactively organizes {hishertheir} tasks with impressive independence."),
        ("E", "{Name} anticipates next steps and manages responsibilities without reminders."),
        ("E", "{Name} upholds classroom norms while guiding peers through positive example."),
        ("E", "{Name} naturally assumes leadership roles through {hishertheir} consistent reliability."),
        ("G", "{Name} consistently reflects before speaking up in class, making sure {hishertheir} contributions stay focused and relevant."),
        ("G", "All assigned work gets completed and turned in punctually by {Name}, meeting every deadline."),
        ("G", "In every classroom setting, {Name} maintains respectful and considerate behavior at all times."),
        ("G", "With little need for prompting, {Name} reliably follows all classroom procedures and expectations."),
        ("G", "During discussions, {Name} demonstrates excellent patience, always waiting to be acknowledged before sharing {hishertheir} thoughts."),
        ("G", "{Name} consistently fulfills requirements while taking full ownership of {hishertheir} choices and actions."),
        ("S", "{Name} submits classwork and homework assignments when given periodic reminders to do so."),
        ("S", "{Name} maintains proper conduct during lessons and breaks, though sometimes needs gentle prompts from staff."),
        ("S", "While {Name} accepts responsibility for {hishertheir} actions at times, {heSheThey} benefits from occasional redirection to remain focused."),
        ("S", "{Name} turns in assignments by deadlines but would benefit from double-checking requirements to ensure {hishertheir} work meets all expectations."),
        ("S", "{Name} demonstrates emerging responsibility in task completion, though consistency improves with regular check-ins."),
        ("S", "With some teacher prompting, {Name} adheres to our collaboratively established classroom rules and school policies."),
        ("NS", "{Name} submits completed assignments when given both reminders and adjusted deadlines to support {himherthem}."),
        ("NS", "{Name} finds it challenging to consistently meet academic obligations and classroom expectations."),
        ("NS", "{Name} needs frequent guidance from staff to maintain appropriate conduct during instructional time."),
        ("NS", "{Name} has shown gradual improvement in behavior during lessons and breaks, and should keep focusing on this progress."),
        ("NS", "{Name} regularly needs assistance to complete work by deadlines and manage academic responsibilities."),
        ("NS", "With modified timelines and teacher support, {Name} is able to finish certain assignments and classroom tasks."),
        ("NextSteps", "{Name} should help with classroom jobs more regularly to maintain a neat workspace."),
        ("NextSteps", "{Name} is encouraged to return materials properly and assist with cleanup independently."),
        ("NextSteps", "{Name} needs to focus on working independently with appropriate behavior during all school times."),
        ("NextSteps", "{Name} should verify {hishertheir} schedule and materials before each class."),
        ("NextSteps", "{Name} is encouraged to plan ahead and manage {hishertheir} tasks more proactively."),
        ("NextSteps", "{Name} should ask for help sooner while working on completing tasks independently."),
        ("NextSteps", "{Name} is encouraged to use a planner or app to track assignments and due dates."),
    ],
    "Organization": [
        ("E", "{Name} skillfully creates and executes effective strategies for tackling assignments across all subjects, whether through study guides, graphic organizers, or other planning methods."),
        ("E", "{Name} never fails to come prepared with all necessary supplies for each class session."),
        ("E", "{Name} reliably utilizes digital platforms like Google Classroom or traditional planners to stay on top of upcoming deadlines and school events."),
        ("E", "{Name} demonstrates exceptional time-management skills, consistently prioritizing tasks to submit high-quality work by deadlines."),
        ("E", "{Name} effectively locates, assesses, and applies various resources and information to successfully complete academic work, including digital tools and assignment rubrics."),
        ("G", "{Name} consistently submits assignments properly formatted and punctually."),
        ("G", "{Name} effectively organizes {hishertheir} workload to meet all deadlines successfully."),
        ("G", "Across all subjects, {Name} develops and follows practical approaches to complete work, demonstrating good time management."),
        ("G", "{Name} skillfully locates, collects, and assesses relevant materials to accomplish academic tasks."),
        ("G", "{Name} reliably arrives at each class session equipped with the appropriate learning materials and supplies."),
        ("S", "{Name} is making progress in maintaining better organization of {hishertheir} study materials and personal workspace."),
        ("S", "When engaged by a topic, {Name} creates effective work plans, though benefits from additional guidance with more challenging or less preferred subjects."),
        ("S", "{Name} capably researches using digital tools, and is developing skills to better assess the quality of information sources."),
        ("S", "With occasional reminders, {Name} brings most necessary materials to class sessions."),
        ("S", "{Name} utilizes Google Classroom effectively to monitor some important dates and tasks."),
        ("NS", "{Name} works well independently on straightforward tasks when the subject matter captures {hishertheir} interest."),
        ("NS", "With individualized or small-group support from the teacher, {Name} consistently meets assignment deadlines."),
        ("NS", "While {Name} utilizes Google Classroom for coursework, {heSheThey} would benefit from checking it more frequently to stay current with assessments and deadlines."),
        ("NS", "{Name} demonstrates the ability to research topics of personal interest using technology, though should continue developing skills to verify source reliability."),
        ("NextSteps", "{Name} should review the schedule before leaving {hishertheir} locker to confirm all necessary class materials are packed."),
        ("NextSteps", "{Name} must remember to transport homework between home and school reliably."),
        ("NextSteps", "{Name} is encouraged to maintain better organization of {hishertheir} notes, binders, and locker space."),
        ("NextSteps", "{Name} would benefit from prioritizing tasks and improving time management to meet deadlines consistently."),
        ("NextSteps", "{Name} should verify the reliability of sources when conducting research."),
        ("NextSteps", "{Name} needs to consistently create and follow structured plans to complete work punctually."),
    ],
    "Independent Work": [
        ("E", "{Name} demonstrates excellent initiative by starting assignments promptly and maintaining strong focus during independent work sessions."),
        ("E", "{Name} consistently follows both verbal and written directions for classroom activities and assignments with accuracy."),
        ("E", "{Name} makes productive use of any extra class time to further {hishertheir} learning or complete additional work."),
        ("E", "{Name} effectively tracks and adjusts {hishertheir} work strategies to accomplish tasks and meet personal objectives."),
        ("E", "{Name} maintains consistent focus on assignments and transitions independently between tasks as needed."),
        ("G", "{Name} demonstrates excellent initiative by beginning tasks promptly after directions are given, requiring little teacher guidance."),
        ("G", "{Name} maintains strong focus during lessons, showing good resistance to classroom distractions."),
        ("G", "{Name} follows instructions carefully and transitions to subsequent activities at the proper times."),
        ("G", "{Name} effectively reviews and adjusts {hishertheir} work strategies to ensure timely task completion."),
        ("G", "{Name} would benefit from consistently referring to grading rubrics and success criteria to better meet assignment expectations."),
        ("S", "{Name} is developing better time management skills, particularly for shorter, well-defined assignments."),
        ("S", "While {Name} sometimes checks {hishertheir} progress, {heSheThey} benefits from teacher guidance to adjust {hishertheir} approach and maintain focus."),
        ("S", "{Name} produces {hishertheir} best work in quieter settings where {heSheThey} can concentrate without peer distractions."),
        ("S", "With teacher prompting, {Name} starts tasks and utilizes class time productively."),
        ("S", "{Name} follows directions when given reminders and support from the instructor."),
        ("NS", "{Name} is developing strategies to minimize social interactions during independent work, helping {himherthem} finish assignments accurately and punctually."),
        ("NS", "{Name} benefits from periodic teacher reminders to maintain focus and limit distractions during work time."),
        ("NS", "In a quiet environment with adult supervision, {Name} demonstrates the ability to concentrate and work productively for brief intervals."),
        ("NS", "{Name} is learning to implement organizational supports like timers and task lists to improve {hishertheir} independent work habits."),
        ("NS", "{Name} requires one-on-one teacher assistance to successfully complete assignments by their deadlines."),
        ("NextSteps", "{Name} should prioritize assignments and plan time effectively to work at a steady pace without rushing."),
        ("NextSteps", "{Name} is encouraged to stay focused during class time and minimize distractions."),
        ("NextSteps", "{Name} would benefit from setting clear goals before beginning independent work to maintain motivation."),
        ("NextSteps", "{Name} should develop the habit of reviewing instructions carefully before starting assignments to prevent mistakes."),
        ("NextSteps", "{Name} is encouraged to incorporate short, scheduled breaks to sustain concentration during longer tasks."),
        ("NextSteps", "{Name} should practice dividing complex assignments into smaller parts to make them more manageable."),
        ("NextSteps", "{Name} would work more effectively by choosing quiet classroom areas with fewer distractions."),
    ],
    "Collaboration": [
        ("E", "{Name} thoughtfully considers peers' perspectives during both small-group and whole-class discussions."),
        ("E", "{Name} flexibly assumes different group roles and fosters inclusivity among classmates."),
        ("E", "{Name} proactively shares knowledge and tools to support collaborative problem-solving."),
        ("E", "{Name} enthusiastically engages in all group activities, readily adapting to assigned roles."),
        ("E", "{Name} naturally guides teams toward objectives while elevating peers' contributions."),
        ("G", "{Name} reliably fulfills {hishertheir} responsibilities in group projects."),
        ("G", "{Name} cultivates positive peer relationships through respectful interactions."),
        ("G", "{Name} exchanges ideas and materials effectively during partnered tasks."),
        ("G", "{Name} navigates group dynamics constructively to resolve disagreements."),
        ("G", "{Name} finds joy in teamwork while maintaining equal participation."),
        ("S", "{Name} contributes quietly but consistently to small-group work with prompts."),
        ("S", "{Name} collaborates more openly when grouped with preferred peers."),
        ("S", "{Name} shares limited input during collaborations, often assuming observer roles."),
        ("S", "{Name} requires occasional guidance to complete group assignment components."),
        ("S", "{Name} is expanding {hishertheir} comfort working with diverse classmates."),
        ("NS", "{Name} is gaining confidence to undertake varied group roles and leadership."),
        ("NS", "{Name} practices conflict-resolution strategies during peer interactions."),
        ("NS", "{Name} thrives in collaborative settings with direct teacher facilitation."),
        ("NextSteps", "{Name} should listen carefully to group members and stay open to others' ideas."),
        ("NextSteps", "{Name} is encouraged to try different roles (leader/supporter) in group work."),
        ("NextSteps", "{Name} would benefit from speaking up more in class to build understanding and confidence."),
        ("NextSteps", "{Name} should keep practicing ways to solve group disagreements peacefully."),
        ("NextSteps", "{Name} is encouraged to share ideas more often during discussions."),
    ],
    "Initiative": [
        ("E", "{Name} approaches unfamiliar challenges with enthusiasm and a growth mindset."),
        ("E", "{Name} proactively pursues additional learning opportunities beyond assigned tasks."),
        ("E", "{Name} exhibits authentic fascination with cross-curricular topics through thoughtful questions."),
        ("E", "{Name} initiates involvement in school activities and reliably honors commitments."),
        ("E", "{Name} actively incorporates feedback to refine {hishertheir} work, demonstrating intellectual humility."),
        ("G", "{Name} maintains natural curiosity about new concepts and skills."),
        ("G", "{Name} engages with novel topics by seeking clarification and deeper understanding."),
        ("G", "{Name} applies instructor suggestions to enhance {hishertheir} academic performance."),
        ("G", "{Name} volunteers for classroom roles and completes them responsibly."),
        ("G", "{Name} is developing the habit of using rubrics to guide {hishertheir} work."),
        ("S", "{Name} shows particular interest in specific subject areas, asking relevant questions."),
        ("S", "With encouragement, {Name} adopts a constructive approach to new learning experiences."),
        ("S", "{Name} works most productively on unfamiliar tasks with peer collaboration or teacher support."),
        ("S", "{Name} participates in classroom jobs but benefits from progress check-ins."),
        ("NS", "{Name} engages positively only with select high-interest topics."),
        ("NS", "{Name} is building independence in problem-solving before seeking assistance."),
        ("NS", "{Name} requires scaffolding to participate in extended learning activities."),
        ("NS", "{Name} needs regular motivation and supervision to initiate tasks."),
        ("NextSteps", "{Name} should approach new lessons with curiosity and optimism."),
        ("NextSteps", "{Name} is encouraged to pursue extra learning challenges beyond requirements."),
        ("NextSteps", "{Name} should try new activities before deciding they're too hard or boring."),
        ("NextSteps", "{Name} would benefit by connecting schoolwork to personal interests for better engagement."),
        ("NextSteps", "{Name} is encouraged to participate more in classroom activities and events."),
    ],
    "Self Regulation": [
        ("E", "{Name} formulates precise, insightful questions when seeking clarification, demonstrating independent thinking."),
        ("E", "{Name} meets academic challenges with determination and a solutions-oriented mindset."),
        ("E", "{Name} makes intentional decisions that support {hishertheir} learning objectives."),
        ("E", "{Name} would benefit from embracing more ambitious learning targets to maximize {himselfherselfthemselves} potential."),
        ("E", "{Name} should continue meticulous proofreading habits to achieve flawless final products."),
        ("G", "{Name} establishes and tracks personal academic benchmarks."),
        ("G", "{Name} appropriately requests help from staff or classmates when concepts are unclear."),
        ("G", "{Name} recognizes effective learning tactics to accomplish {hishertheir} aims."),
        ("G", "{Name} demonstrates self-awareness by articulating learning preferences and needs."),
        ("G", "{Name} comfortably seeks teacher guidance and should maintain this productive habit."),
        ("S", "{Name} works through difficulties successfully with individualized teacher support."),
        ("S", "{Name} sometimes asks for help before attempting independent problem-solving strategies."),
        ("S", "{Name} creates and pursues objectives primarily in preferred subject areas."),
        ("S", "{Name} is developing perseverance skills and alternative approaches for challenging tasks."),
        ("NS", "{Name} intermittently utilizes offered academic support."),
        ("NS", "{Name} avoids difficult tasks but is learning coping strategies for academic hurdles."),
        ("NS", "{Name} is working on maintaining composure when facing obstacles."),
        ("NS", "{Name} requires scaffolding to establish and pursue measurable academic goals."),
        ("NextSteps", "{Name} should try using classroom resources to solve problems independently before seeking help."),
        ("NextSteps", "{Name} is encouraged to practice calming techniques (like deep breathing) to maintain focus"),
        ("NextSteps", "{Name} is urged to set ambitious goals and use spare class time productively"),
        ("NextSteps", "{Name} should reflect on personal strengths and needs to better communicate support requirements"),
    ],
    CONCLUSION_CATEGORY: [
        ("END", "{{student_first}}, you've had a strong start to the year! Keep up the hard work."),
        ("END", "{{student_first}}, you've had a good start to the year. Keep working hard and I know we will see amazing results!"),
        ("END", "I am happy to have you in my class this year and I am looking forward to seeing what you can accomplish!"),
        ("END", "{{student_first}}, you have had a successful first term. Keep up the good work!"),
        ("END", "{{student_first}}, you've had a successful year. Wishing you the best of luck next year!"),
        ("END", "{{student_first}}, you have been a positive role model for our classmates this year. Keep up the good work next year!"),
        ("END", "{{student_first}} has handled the challenges of this school year with grace and was a pleasure to teach. Best of luck next year!"),
    ],
}


def starter_bank(jurisdiction):
    """Small starter set used when a jurisdiction's bank is empty."""
    base = ["learning", jurisdiction]
    return [
        {"text": "🟢 {{First}} has demonstrated strong learning skills this term.", "tags": base + ["opener", "level:E"]},
        {"text": "🟡 {{First}} is making steady progress in learning skills.", "tags": base + ["opener", "level:G"]},
        {"text": "🟠 {{First}} is developing learning skills with growing consistency.", "tags": base + ["opener", "level:S"]},
        {"text": "🔴 {{First}} would benefit from additional support to build learning skills.", "tags": base + ["opener", "level:NS"]},

        {"text": "{{First}} submits assignments on time and takes responsibility for {{their}} learning.", "tags": base + ["category:responsibility", "level:E"]},
        {"text": "{{First}} is organizing materials more consistently.", "tags": base + ["category:organization", "level:G"]},
        {"text": "{{First}} completes tasks with reminders and support.", "tags": base + ["category:independent-work", "level:S"]},
        {"text": "{{First}} is learning to collaborate respectfully with peers.", "tags": base + ["category:collaboration", "level:S"]},
        {"text": "{{First}} shows initiative by volunteering and taking on challenges.", "tags": base + ["category:initiative", "level:E"]},
        {"text": "{{First}} is developing strategies to self-regulate during work time.", "tags": base + ["category:self-regulation", "level:S"]},

        {"text": "Continue to use a planner to record tasks and deadlines.", "tags": base + ["next-steps", "category:organization"]},
        {"text": "Set a small goal each class and reflect briefly at the end.", "tags": base + ["next-steps", "category:responsibility"]},
        {"text": "Use checklists to complete multi-step tasks independently.", "tags": base + ["next-steps", "category:independent-work"]},
        {"text": "Invite a peer to share ideas and build on others' thinking.", "tags": base + ["next-steps", "category:collaboration"]},
        {"text": "Seek feedback and try an extension task when finished early.", "tags": base + ["next-steps", "category:initiative"]},
        {"text": "Practice short breaks and deep breaths to refocus.", "tags": base + ["next-steps", "category:self-regulation"]},

        {"text": "Hello {{guardian_name}}, {{First}} has been making steady progress in {{subject_or_class}}.",
         "subject": "Quick update about {{first}}", "tags": ["email", "topic:Progress"] + base},
        {"text": "Hello {{guardian_name}}, I'm reaching out regarding {{first}}'s recent challenges in {{subject_or_class}}.",
         "subject": "Support plan for {{first}}", "tags": ["email", "topic:Concern"] + base},
    ]
